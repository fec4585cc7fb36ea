"""Headless parameter sweep runner.

Edit the CONFIG block to choose the swept parameter. The sweep is run page
by page until its maximum is reached (or for MAX_PAGES pages when it has
none), and the results are printed as a table.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Dict

import pandas as pd

# Ensure src/ is on path when running from repo root
REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = REPO_ROOT / "src"
if str(SRC_PATH) not in sys.path:
	sys.path.insert(0, str(SRC_PATH))

from wildfire_ca import Density, ExperimentConfig, FireGrid, Vegetation, run_experiment
from wildfire_ca.results import moving_average


# ---- User-configurable parameters ----
CONFIG: Dict[str, Any] = {
	# Grid
	"width": 100,
	"height": 100,
	"fire_pos": None,  # (row, col) or None for centre

	# Sweep
	"variable": "wind_speed",  # wind_speed, wind_dir, veg_weights.FOREST, base_prob, ...
	"start": 0.0,
	"step": 0.5,
	"nb_iters": 5,
	"max": None,
	"label_format": "{} m/s",

	# Overrides of SimulationParams
	"sim_options": {
		"base_prob": 0.4,
		"max_burn": 1,
	},

	# Run control
	"seed": 1,
	"max_workers": 4,
	"max_pages": 2,
	"smoothing_window": 3,
}


def build_grid(cfg: Dict[str, Any]) -> FireGrid:
	grid = FireGrid.create(cfg["width"], cfg["height"], Vegetation.FOREST, Density.NORMAL)
	# Stripe of shrubland and a tertiary road to give vegetation fractions something to show
	grid.paint_region(cfg["height"] // 4, cfg["width"] // 4, Vegetation.SHRUBLAND, Density.DENSE, thickness=cfg["width"] // 8)
	for col in range(cfg["width"]):
		grid.paint_region((3 * cfg["height"]) // 4, col, Vegetation.TERTIARY_ROAD, Density.NO_VEGETATION)
	return grid


def main():
	logging.basicConfig(
		level=logging.INFO,
		format='%(asctime)s - %(levelname)s - %(message)s'
	)

	grid = build_grid(CONFIG)
	config = ExperimentConfig.from_dict(CONFIG)

	frames = []
	for page in range(1, CONFIG["max_pages"] + 1):
		results = run_experiment(config, grid)
		frames.append(results.to_frame())
		print(f"[page {page}] {', '.join(results.labels)}")
		if results.complete:
			break
		config = config.next_page(results.next_start)

	table = pd.concat(frames, ignore_index=True)
	table["burn_smoothed"] = moving_average(table["burn_percentage"].tolist(), CONFIG["smoothing_window"])
	print(table[["label", "step_count", "burn_percentage", "burn_smoothed", "centre_row", "centre_col"]].to_string(index=False))


if __name__ == "__main__":
	main()
