"""
Batch ALS correction and plan-line optimization from text files.

Usage:
    python trackals_batch.py correct "data/*.txt" --method spline \
        --baseline_length 40 --data_interval 0.25 --plot

    python trackals_batch.py optimize restored.txt plan.txt \
        --max_upward 50 --max_downward 10 --target_ratio 0.7

Notes:
- Input files hold two columns: position (m) and value (mm). Header lines
  are skipped automatically.
- Preprocessing: optional cropping (--start/--end) and resampling onto a
  uniform grid (--resample, uses --data_interval).
- Baseline options:
    moving_average: --baseline_length
    polynomial:     --degree
    spline:         --knot_spacing
    butterworth:    --cutoff_wavelength
- Outputs: `correct` writes <base>_als.txt (and <base>_als.png with --plot)
  next to each input file; `optimize` writes <plan>_optimized.txt and
  <plan>_report.txt.
"""

import argparse
import glob
import os
import sys

from trackals.config import SUPPORTED_METHODS
from trackals.correction import batch_correction, format_statistics
from trackals.data_import import load_data_file, save_series
from trackals.data_model import to_points
from trackals.data_preprocessing import crop_range, resample_uniform
from trackals.errors import TrackALSError
from trackals.optimizer import UpwardPriorityOptimizer, format_report
from trackals.utils.logger import log_error, log_warning, setup_logger


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Track geometry ALS correction and plan-line optimization")
    p.add_argument("--log_dir", default=None, help="Write a log file into this directory")
    sub = p.add_subparsers(dest="command", required=True)

    c = sub.add_parser("correct", help="Apply ALS correction to every matching file")
    c.add_argument("pattern", help="Glob pattern for data files, e.g. 'data/*.txt'")
    c.add_argument("--method", default="moving_average", choices=list(SUPPORTED_METHODS), help="Baseline method")
    c.add_argument("--baseline_length", type=float, default=100.0, help="Baseline length (m)")
    c.add_argument("--data_interval", type=float, default=0.25, help="Sample spacing (m)")
    c.add_argument("--degree", type=int, default=6, help="Polynomial degree")
    c.add_argument("--knot_spacing", type=float, default=None, help="Spline knot spacing (m)")
    c.add_argument("--cutoff_wavelength", type=float, default=None, help="Butterworth cutoff wavelength (m)")
    c.add_argument("--no_endpoints", action="store_true", help="Do not blend baseline ends toward the raw data")
    c.add_argument("--start", type=float, default=None, help="Crop: first position (m)")
    c.add_argument("--end", type=float, default=None, help="Crop: last position (m)")
    c.add_argument("--resample", action="store_true", help="Resample onto a uniform --data_interval grid")
    c.add_argument("--workers", type=int, default=None, help="Process files on this many threads")
    c.add_argument("--plot", action="store_true", help="Save a PNG plot per file")

    o = sub.add_parser("optimize", help="Optimize a plan line against a restored waveform")
    o.add_argument("restored", help="Restored waveform file")
    o.add_argument("plan", help="Initial plan line file")
    o.add_argument("--max_upward", type=float, default=50.0, help="Maximum lift (mm)")
    o.add_argument("--max_downward", type=float, default=10.0, help="Maximum lowering (mm)")
    o.add_argument("--target_ratio", type=float, default=0.7, help="Target upward ratio")
    o.add_argument("--iterations", type=int, default=100, help="Iteration limit")
    o.add_argument("--threshold", type=float, default=0.01, help="Convergence threshold")
    o.add_argument("--no_lift", action="store_true", help="Disable the uniform lift step")
    o.add_argument("--timeout", type=float, default=None, help="Time budget (s)")
    o.add_argument("--plot", action="store_true", help="Save a PNG plot")

    return p.parse_args(argv)


def load_series(fname, args):
    x, y = load_data_file(fname)
    if args.start is not None or args.end is not None:
        x, y = crop_range(x, y, start=args.start, end=args.end)
    if args.resample:
        x, y = resample_uniform(x, y, data_interval=args.data_interval)
    return to_points(x, y)


def export_correction(base_path, result, plot=False):
    rows = result['data']
    save_series(
        f"{base_path}_als.txt",
        [[r['position'] for r in rows], [r['original_value'] for r in rows],
         [r['baseline_value'] for r in rows], [r['corrected_value'] for r in rows]],
        ["Position", "Original", "Baseline", "Corrected"],
    )
    with open(f"{base_path}_als_report.txt", "w") as f:
        f.write(format_statistics(result['statistics']))
        f.write("\n")
    if plot:
        from trackals.plotting import plot_correction
        plot_correction(result, title=os.path.basename(base_path)).savefig(f"{base_path}_als.png")


def run_correct(args):
    files = sorted(glob.glob(args.pattern))
    if not files:
        print(f"No files matched pattern: {args.pattern}")
        return 1

    datasets = []
    for fname in files:
        try:
            datasets.append({'id': fname, 'data': load_series(fname, args)})
        except (OSError, TrackALSError) as e:
            log_warning(f"Error loading {fname}: {e}")

    options = {
        'method': args.method,
        'baseline_length': args.baseline_length,
        'data_interval': args.data_interval,
        'polynomial_degree': args.degree,
        'knot_spacing': args.knot_spacing,
        'cutoff_wavelength': args.cutoff_wavelength,
        'preserve_endpoints': not args.no_endpoints,
    }
    batch = batch_correction(datasets, options, max_workers=args.workers)

    for item in batch['results']:
        if item['success']:
            base, _ = os.path.splitext(item['id'])
            export_correction(base, item['result'], plot=args.plot)
            print(f"Processed {item['id']}: improvement "
                  f"{item['result']['statistics']['improvement']:.1f}%")
        else:
            print(f"Error processing {item['id']}: {item['error']}", file=sys.stderr)

    summary = batch['summary']
    print(f"{summary['successful']}/{summary['total']} succeeded, "
          f"average improvement {summary['average_improvement']:.1f}%")
    return 0 if summary['failed'] == 0 and len(datasets) == len(files) else 1


def run_optimize(args):
    restored = to_points(*load_data_file(args.restored))
    plan = to_points(*load_data_file(args.plan))

    optimizer = UpwardPriorityOptimizer(
        max_upward=args.max_upward,
        max_downward=args.max_downward,
        target_upward_ratio=args.target_ratio,
        iteration_limit=args.iterations,
        convergence_threshold=args.threshold,
        enable_lift=not args.no_lift,
    )
    result = optimizer.optimize_plan_line(restored, plan, timeout=args.timeout)
    report = optimizer.generate_report(result)
    violations = optimizer.check_constraints(result['optimized_plan_line'], restored)

    base, _ = os.path.splitext(args.plan)
    optimized = result['optimized_plan_line']
    save_series(
        f"{base}_optimized.txt",
        [[p['position'] for p in optimized], [p['value'] for p in optimized], result['movements']],
        ["Position", "Plan", "Movement"],
    )
    with open(f"{base}_report.txt", "w") as f:
        f.write(format_report(report))
        f.write(f"\nConstraint violations = {violations['total_violations']}\n")
    if args.plot:
        from trackals.plotting import plot_optimization
        plot_optimization(restored, plan, result).savefig(f"{base}_optimized.png")

    print(format_report(report))
    return 0


def main(argv=None):
    args = parse_args(argv)
    setup_logger(log_dir=args.log_dir)
    try:
        if args.command == "correct":
            return run_correct(args)
        return run_optimize(args)
    except (OSError, TrackALSError) as e:
        log_error(f"{args.command} failed", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
