"""
Write a random input bundle for `python -m tlift.app`.

Usage:
    python scripts/make_synthetic.py --output data/synthetic.npz
"""

import os
import argparse

import numpy as np


def main():
    p = argparse.ArgumentParser()
    p.add_argument('--output', '-o', default='data/synthetic.npz')
    p.add_argument('--gallery', type=int, default=100)
    p.add_argument('--probe', type=int, default=50)
    p.add_argument('--cams', type=int, default=5)
    p.add_argument('--max-time', type=int, default=2000)
    p.add_argument('--seed', type=int, default=0)
    args = p.parse_args()

    rng = np.random.default_rng(args.seed)
    bundle = {
        'in_score': 1.0 / (1.0 + np.exp(-rng.standard_normal((args.gallery, args.probe)))),
        'gal_cam_id': rng.integers(1, args.cams + 1, args.gallery),
        'gal_time': rng.integers(0, args.max_time, args.gallery).astype(np.float64),
        'prob_cam_id': rng.integers(1, args.cams + 1, args.probe),
        'prob_time': rng.integers(0, args.max_time, args.probe).astype(np.float64),
    }

    out_dir = os.path.dirname(args.output)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    np.savez(args.output, **bundle)
    print(f"Saved {args.output}: gallery={args.gallery} probe={args.probe} cams={args.cams}")


if __name__ == '__main__':
    main()
