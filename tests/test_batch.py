"""Tests for the process-pool batch runner."""

import numpy as np

from leafcomplex.batch import analyze_batch
from tests.conftest import disk_mask


def test_batch_isolates_failures():
    masks = [
        ("b_empty", np.zeros((40, 40), dtype=bool)),
        ("a_disk", disk_mask(61, 20)),
    ]
    results = analyze_batch(masks, max_workers=2)

    assert [r.key for r in results] == ["a_disk", "b_empty"]
    good, bad = results
    assert good.ok
    assert good.record.area == int(disk_mask(61, 20).sum())
    assert not bad.ok
    assert bad.record is None
    assert "DegenerateShapeError" in bad.error


def test_batch_empty_input():
    assert analyze_batch([], max_workers=1) == []
