#!/usr/bin/env python3
"""
CLI: score a face from detector landmarks plus body measurements.
Usage:
  python run_scan.py --landmarks scan.json --height 180 --weight 78 --waist 80 --shoulder 125 [--gender male] [--json]
  python run_scan.py --landmarks scans/ --height 180 --weight 78 --waist 80 --shoulder 125 [--top 5]
"""

import argparse
import json
import logging
import os
import sys

# Ensure project root is on path so config and psl_scorer resolve when run from any cwd
_SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
if _SCRIPT_DIR not in sys.path:
    sys.path.insert(0, _SCRIPT_DIR)

from tqdm import tqdm

from psl_scorer.analyzer import FaceAnalyzer, ScanReport, rank_scans
from psl_scorer.body import BodyStats, Gender
from psl_scorer.catalog import category_label, load_catalog
from psl_scorer.errors import CatalogError, MissingLandmarksError

LANDMARK_EXTENSIONS = {".json"}


def collect_landmark_paths(folder: str) -> list[str]:
    """Collect landmark JSON files from a folder (no recursion), sorted by name."""
    paths = []
    if not os.path.isdir(folder):
        return paths
    for name in sorted(os.listdir(folder)):
        if name.startswith("."):
            continue
        ext = os.path.splitext(name)[1].lower()
        if ext in LANDMARK_EXTENSIONS:
            paths.append(os.path.join(folder, name))
    return paths


def format_report(report: ScanReport) -> str:
    """Human-readable summary of one scan."""
    r = report.result
    m = report.metrics
    lines = [
        f"PSL score:      {r.overall:.2f} / 10  ({r.score_category.value})",
        f"Potential max:  {r.potential_max:.2f}  (+{r.improvement_potential:.2f})",
        "",
        f"Eye area        {r.eye_area.total:5.2f}  canthal {r.eye_area.canthal_tilt:.2f}"
        f"  ipd {r.eye_area.ipd:.2f}  brow {r.eye_area.brow_ridge:.2f}",
        f"Bone structure  {r.bone_structure.total:5.2f}  fwhr {r.bone_structure.fwhr:.2f}"
        f"  gonial {r.bone_structure.gonial_angle:.2f}  cheekbone {r.bone_structure.cheekbone:.2f}",
        f"Symmetry        {r.symmetry.total:5.2f}  eye {r.symmetry.eye:.2f}"
        f"  jaw {r.symmetry.jaw:.2f}  overall {r.symmetry.overall:.2f}",
        f"Body            {r.softmax.total:5.2f}  bmi {r.softmax.bmi:.2f}"
        f"  waist/shoulder {r.softmax.waist_to_shoulder:.2f}  skin {r.softmax.skin_texture:.2f}",
        "",
        f"Canthal tilt {m.average_canthal_tilt:.1f} deg ({m.canthal_tilt_category.value}),"
        f" FWHR {m.fwhr:.2f}, gonial angle {m.gonial_angle:.1f} deg,"
        f" midface ratio {m.midface_ratio:.2f}",
        "",
        "Recommendations:",
    ]
    for i, rec in enumerate(report.recommendations, 1):
        lines.append(
            f"  {i:2d}. [{rec.priority.value}] {rec.title} ({category_label(rec.category)})"
        )
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Score a face (PSL 1-10) from landmark regions and body measurements."
    )
    parser.add_argument(
        "--landmarks",
        required=True,
        help="Landmark JSON file, or a folder of them to score and rank",
    )
    parser.add_argument("--height", type=float, required=True, help="Height in cm")
    parser.add_argument("--weight", type=float, required=True, help="Weight in kg")
    parser.add_argument("--waist", type=float, required=True, help="Waist circumference in cm")
    parser.add_argument("--shoulder", type=float, required=True, help="Shoulder circumference in cm")
    parser.add_argument(
        "--gender",
        choices=[g.value for g in Gender],
        default=Gender.MALE.value,
        help="Selects the BMI and waist-to-shoulder ideals (default: male)",
    )
    parser.add_argument(
        "--catalog",
        default=None,
        help="Optional routine catalog JSON (default: bundled catalog)",
    )
    parser.add_argument(
        "--top",
        type=int,
        default=None,
        help="Folder mode: print only the top N scans",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print full results as JSON",
    )
    parser.add_argument(
        "--output",
        default=None,
        help="Optional path to write the JSON results",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Debug logging from the scoring pipeline",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    body = BodyStats(
        height_cm=args.height,
        weight_kg=args.weight,
        waist_cm=args.waist,
        shoulder_cm=args.shoulder,
        gender=Gender(args.gender),
    )

    try:
        catalog = load_catalog(args.catalog)
    except CatalogError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    analyzer = FaceAnalyzer(catalog=catalog)

    # --- Mode: single landmark file ---
    if os.path.isfile(args.landmarks):
        try:
            report = analyzer.analyze_file(args.landmarks, body)
        except (MissingLandmarksError, CatalogError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        except (OSError, ValueError) as e:
            print(f"Error: cannot read landmarks {args.landmarks}: {e}", file=sys.stderr)
            return 1
        payload = report.to_dict()
        if args.json:
            print(json.dumps(payload, indent=2, ensure_ascii=False))
        else:
            print(format_report(report))
        if args.output:
            with open(args.output, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
            print(f"\nWrote results to {args.output}", file=sys.stderr)
        return 0

    # --- Mode: folder of scans, ranked ---
    paths = collect_landmark_paths(args.landmarks)
    if not paths:
        print(f"Error: no landmark files found in {args.landmarks}", file=sys.stderr)
        return 1

    pbar = tqdm(total=len(paths), desc="Scoring", unit="scan", file=sys.stderr)

    def progress(processed: int, total: int):
        pbar.n = min(processed, total)
        pbar.refresh()

    try:
        ranked = rank_scans(paths, body, analyzer=analyzer, top_k=args.top, progress_callback=progress)
    finally:
        pbar.close()

    if not ranked:
        print("No scans could be scored (all were missing required landmarks).")
        return 1

    results = [{"path": path, **report.to_dict()} for path, report in ranked]
    if args.json:
        print(json.dumps(results, indent=2, ensure_ascii=False))
    else:
        for path, report in ranked:
            print(f"{report.result.overall:.2f}\t{report.result.potential_max:.2f}\t{path}")
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            json.dump(results, f, indent=2, ensure_ascii=False)
        print(f"\nWrote {len(results)} results to {args.output}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
