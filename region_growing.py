#!/usr/bin/env python3
"""
region_growing.py

Batch region-growing segmentation over a directory of images.

Modes:
  Without --seeds_dir every image is segmented exhaustively: each pixel, in
  row-major order, starts a new region if no earlier region reached it.
  With --seeds_dir, images that have a matching seed file are grown from those
  seeds only; images without one are skipped.

Seed files, matched by basename:
  <stem>.json  list of [x, y] pairs, x = row, y = column
  <stem>.npy   H x W mask, non-zero pixels are seeds in row-major order
  <stem>.png   same as .npy, read as a paletted or grayscale mask

Outputs, under <output_dir>/region_growing:
  <stem>_segmented.png  colorized label map, white = unassigned
  <stem>_labels.npy     raw int32 label map, with --save-labels
"""

import argparse, json, logging, time
from pathlib import Path
from typing import List, Optional, Tuple

import numpy as np
from PIL import Image
from tqdm import tqdm

from regrow import MAX_ITERATIONS, load_image_rgb, save_colorized_png, segment

METHOD_NAME = "region_growing"
IMG_EXTS = {".jpg", ".jpeg", ".png", ".bmp", ".tif", ".tiff"}
SEED_EXTS = (".json", ".npy", ".png")


# --------------------------- I O helpers ---------------------------

def load_seed_points(seed_path: str) -> List[Tuple[int, int]]:
    """Load seeds as a list of (x, y) from .json, .npy or .png."""
    p = Path(seed_path)
    if p.suffix.lower() == ".json":
        with open(p, "r", encoding="utf-8") as f:
            raw = json.load(f)
        return [(int(x), int(y)) for x, y in raw]
    if p.suffix.lower() == ".npy":
        mask = np.load(seed_path)
    else:
        mask = np.asarray(Image.open(seed_path))
    if mask.ndim == 3:
        mask = mask.any(axis=2)
    xs, ys = np.nonzero(mask)
    return [(int(x), int(y)) for x, y in zip(xs, ys)]


def find_image_seed_pairs(images_dir: str, seeds_dir: Optional[str]) -> List[Tuple[str, Optional[str]]]:
    """Pair images with seed files by basename. Prefer .json, then .npy, then .png."""
    images_dir = Path(images_dir)
    imgs = [p for p in images_dir.iterdir() if p.is_file() and p.suffix.lower() in IMG_EXTS]
    pairs = []
    for ip in sorted(imgs):
        seed_path = None
        if seeds_dir is not None:
            for ext in SEED_EXTS:
                candidate = Path(seeds_dir) / f"{ip.stem}{ext}"
                if candidate.exists():
                    seed_path = str(candidate)
                    break
        pairs.append((str(ip), seed_path))
    return pairs


# --------------------------- Runner ---------------------------

def run_single_image(image_path: str, seed_path: Optional[str], args):
    image = load_image_rgb(image_path)
    seeds = load_seed_points(seed_path) if seed_path is not None else None

    t0 = time.time()
    result = segment(image, args.threshold, seeds=seeds, adaptive=args.adaptive,
                     iteration_cap=args.iteration_cap)
    ms = (time.time() - t0) * 1000.0

    H, W = image.shape[:2]
    logging.info(f"{Path(image_path).stem}, {H}x{W}, regions {result.regions}, "
                 f"iterations {result.iterations}, reclaimed {result.reclaimed}, "
                 f"complete {result.complete}, runtime_ms {ms:.2f}")
    return result


def save_outputs(base: str, labels: np.ndarray, out_root: Path, save_labels: bool) -> None:
    save_colorized_png(labels, str(out_root / f"{base}_segmented.png"))
    if save_labels:
        np.save(out_root / f"{base}_labels.npy", labels)


def select_work(pairs, start_one: int, num_images: int):
    """Slice the pairs to the 1-indexed window, 0 images meaning all that remain."""
    start = max(0, int(start_one) - 1)
    stop = len(pairs) if num_images == 0 else start + int(num_images)
    return pairs[start:stop]


def process_pair(img_path: str, seed_path: Optional[str], out_root: Path, args) -> Optional[dict]:
    """Segment one image and write its outputs. Returns None when it was skipped."""
    base = Path(img_path).stem
    if args.seeds_dir is not None and seed_path is None:
        logging.error(f"Missing seeds for {base}, skipping")
        return None
    try:
        t0 = time.time()
        result = run_single_image(img_path, seed_path, args)
        save_outputs(base, result.labels, out_root, args.save_labels)
    except Exception as e:
        logging.error(f"Error on {base}: {e}")
        return None
    return {"ms": (time.time() - t0) * 1000.0, "capped": result.capped}


def main():
    ap = argparse.ArgumentParser(description="Seeded region growing segmentation, colorized output")
    ap.add_argument("--images_dir", type=str, required=True)
    ap.add_argument("--output_dir", type=str, required=True)
    ap.add_argument("--seeds_dir", type=str, default=None, help="seed files; omit for exhaustive mode")
    ap.add_argument("--threshold", type=float, default=10.0)
    mode = ap.add_mutually_exclusive_group()
    mode.add_argument("--adaptive", dest="adaptive", action="store_true", default=None,
                      help="adaptive threshold (default for seeded runs)")
    mode.add_argument("--fixed", dest="adaptive", action="store_false", default=None,
                      help="fixed threshold (default for exhaustive runs)")
    ap.add_argument("--iteration-cap", type=int, default=MAX_ITERATIONS)
    ap.add_argument("--num-images", type=int, default=0, help="0 means all")
    ap.add_argument("--start-one", type=int, default=1, help="1-indexed start position")
    ap.add_argument("--save-labels", action="store_true", help="also write the raw label map as .npy")
    ap.add_argument("--run-tests", action="store_true")
    args = ap.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(message)s")

    if args.run_tests:
        _run_tests()
        return

    work_list = select_work(find_image_seed_pairs(args.images_dir, args.seeds_dir),
                            args.start_one, args.num_images)
    out_root = Path(args.output_dir) / METHOD_NAME
    out_root.mkdir(parents=True, exist_ok=True)

    outcomes = [process_pair(i, s, out_root, args)
                for i, s in tqdm(work_list, desc="RegionGrow")]
    done = [o for o in outcomes if o is not None]
    times = [o["ms"] for o in done]

    print(json.dumps({
        "total": len(work_list),
        "processed": len(done),
        "skipped": len(outcomes) - len(done),
        "capped": sum(int(o["capped"]) for o in done),
        "avg_runtime_ms": float(np.mean(times)) if times else None,
        "median_runtime_ms": float(np.median(times)) if times else None,
        "threshold": float(args.threshold),
        "seeded": args.seeds_dir is not None,
        "method": METHOD_NAME
    }))


# --------------------------- Minimal tests ---------------------------

def _synthetic_case(H: int = 32, W: int = 32):
    img = np.zeros((H, W, 3), dtype=np.uint8)
    img[:, : W // 2] = (200, 40, 40)
    img[:, W // 2:] = (40, 40, 200)
    return img


def _run_tests():
    logging.info("Running synthetic test")
    img = _synthetic_case()
    exhaustive = segment(img, 10.0)
    assert exhaustive.regions == 2, "two halves must give two regions"
    assert exhaustive.complete, "exhaustive mode must label every pixel"
    seeded = segment(img, 5.0, seeds=[(4, 4)])
    assert seeded.labels[4, 4] == 1, "seed must start region 1"
    assert np.count_nonzero(seeded.labels == 1) == img.shape[0] * img.shape[1] // 2, "left half expected"
    logging.info(f"OK, iterations {exhaustive.iterations} + {seeded.iterations}")
    print(json.dumps({"test": "ok", "regions": int(exhaustive.regions), "iterations": int(seeded.iterations)}))


if __name__ == "__main__":
    main()
