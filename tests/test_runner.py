"""Tests for the batch runner helpers."""

import json
import sys
from types import SimpleNamespace

import numpy as np
from PIL import Image

import region_growing
from region_growing import find_image_seed_pairs, load_seed_points, process_pair, select_work


def test_load_seed_points_json(tmp_path):
    path = tmp_path / "a.json"
    path.write_text(json.dumps([[1, 2], [3, 4]]))
    assert load_seed_points(str(path)) == [(1, 2), (3, 4)]


def test_load_seed_points_mask(tmp_path):
    mask = np.zeros((4, 4), dtype=np.uint8)
    mask[0, 3] = 1
    mask[2, 1] = 1
    path = tmp_path / "a.npy"
    np.save(path, mask)
    assert load_seed_points(str(path)) == [(0, 3), (2, 1)]

    png = tmp_path / "b.png"
    Image.fromarray(mask * 255).save(png)
    assert load_seed_points(str(png)) == [(0, 3), (2, 1)]


def test_find_pairs_prefers_json(tmp_path):
    images = tmp_path / "images"
    seeds = tmp_path / "seeds"
    images.mkdir()
    seeds.mkdir()
    for name in ("a.png", "b.jpg", "notes.txt"):
        (images / name).write_bytes(b"")
    (seeds / "a.npy").write_bytes(b"")
    (seeds / "a.json").write_text("[]")

    pairs = find_image_seed_pairs(str(images), str(seeds))
    assert [p[0].split("/")[-1] for p in pairs] == ["a.png", "b.jpg"]
    assert pairs[0][1].endswith("a.json")
    assert pairs[1][1] is None

    assert all(s is None for _, s in find_image_seed_pairs(str(images), None))


def test_main_writes_outputs(tmp_path, monkeypatch, halves_4x4, capsys):
    images = tmp_path / "images"
    images.mkdir()
    Image.fromarray(halves_4x4).save(images / "halves.png")
    out = tmp_path / "out"

    monkeypatch.setattr(sys, "argv", [
        "region_growing.py", "--images_dir", str(images), "--output_dir", str(out),
        "--threshold", "10", "--save-labels",
    ])
    region_growing.main()

    summary = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert summary["processed"] == 1
    assert summary["skipped"] == 0
    labels = np.load(out / "region_growing" / "halves_labels.npy")
    assert labels.max() == 2
    assert (out / "region_growing" / "halves_segmented.png").exists()


def test_synthetic_self_check(capsys):
    region_growing._run_tests()
    assert '"test": "ok"' in capsys.readouterr().out


def test_select_work_window():
    pairs = [(str(i), None) for i in range(5)]
    assert select_work(pairs, 1, 0) == pairs
    assert select_work(pairs, 2, 2) == pairs[1:3]
    assert select_work(pairs, 4, 10) == pairs[3:]
    assert select_work(pairs, 9, 0) == []


def test_process_pair_skips_missing_seeds(tmp_path):
    args = SimpleNamespace(seeds_dir=str(tmp_path), threshold=5.0, adaptive=None,
                           iteration_cap=100, save_labels=False)
    assert process_pair(str(tmp_path / "a.png"), None, tmp_path, args) is None


def test_process_pair_reports_capped_run(tmp_path, halves_4x4):
    image_path = tmp_path / "halves.png"
    Image.fromarray(halves_4x4).save(image_path)
    seed_path = tmp_path / "halves.json"
    seed_path.write_text(json.dumps([[0, 0]]))
    args = SimpleNamespace(seeds_dir=str(tmp_path), threshold=5.0, adaptive=None,
                           iteration_cap=0, save_labels=False)

    outcome = process_pair(str(image_path), str(seed_path), tmp_path, args)
    assert outcome["capped"]
    assert (tmp_path / "halves_segmented.png").exists()
