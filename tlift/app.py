import os
import argparse
import logging

import numpy as np
from rich import print

from .config import LiftingConfig
from .lifting import TemporalLifter

REQUIRED_ARRAYS = ('in_score', 'gal_cam_id', 'gal_time', 'prob_cam_id', 'prob_time')


def parse_args(argv=None):
    p = argparse.ArgumentParser(description='Apply temporal lifting to a gallery-probe score matrix')
    p.add_argument('--scores', type=str, required=True,
                   help='.npz with in_score, gal_cam_id, gal_time, prob_cam_id, prob_time')
    p.add_argument('--config', type=str, default='configs/tlift.yaml')
    p.add_argument('--output', '-o', type=str, default='outputs/lifted.npz')
    p.add_argument('--tau', type=float)
    p.add_argument('--sigma', type=float)
    p.add_argument('--K', type=int)
    p.add_argument('--alpha', type=float)
    p.add_argument('--workers', dest='num_workers', type=int)
    p.add_argument('--exclude-same-camera', dest='exclude_same_camera',
                   action='store_true', default=None)
    p.add_argument('--profile', action='store_true', default=None)
    p.add_argument('--log-level', type=str, default='WARNING')
    return p.parse_args(argv)


def load_inputs(path):
    with np.load(path) as data:
        missing = [k for k in REQUIRED_ARRAYS if k not in data.files]
        if missing:
            raise KeyError(f"{path} is missing arrays: {missing}")
        return {k: data[k] for k in REQUIRED_ARRAYS}


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING))

    overrides = {k: getattr(args, k) for k in
                 ('tau', 'sigma', 'K', 'alpha', 'num_workers', 'exclude_same_camera', 'profile')}
    cfg = LiftingConfig.from_yaml(args.config, overrides)
    inputs = load_inputs(args.scores)

    print('[bold green]Launching Temporal Lifting[/bold green]')
    print(f'gallery={inputs["in_score"].shape[0]} probe={inputs["in_score"].shape[1]} '
          f'cams={cfg.num_cams} tau={cfg.tau} sigma={cfg.sigma} K={cfg.K} alpha={cfg.alpha}')

    lifter = TemporalLifter(cfg)
    out_score = lifter.lift(**inputs)

    out_dir = os.path.dirname(args.output)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    np.savez(args.output, out_score=out_score)

    if cfg.profile:
        for stage, ms in lifter.profiler.get_summary().items():
            print(f'  {stage}: {ms:.2f} ms')
    print(f'[bold green]Done.[/bold green] Saved {args.output}')
    return out_score


if __name__ == '__main__':
    main()
