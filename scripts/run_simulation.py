#!/usr/bin/env python3
"""Main script to run a single fire spread simulation in the console."""

import logging
import sys
from pathlib import Path

# Add the src directory to the Python path
project_root = Path(__file__).parent.parent
src_path = project_root / "src"
sys.path.insert(0, str(src_path))

from wildfire_ca import FireGrid, FireModel, SimulationParams, StepReport, Vegetation, Density
from wildfire_ca.results import burn_percentage, fire_centre

VEGETATION_SYMBOLS = {
    Vegetation.NO_VEGETATION: "⬜",
    Vegetation.AGRICULTURE: "🌾",
    Vegetation.FOREST: "🌲",
    Vegetation.SHRUBLAND: "🌿",
    Vegetation.PRIMARY_ROAD: "⬛",
    Vegetation.SECONDARY_ROAD: "⬛",
    Vegetation.TERTIARY_ROAD: "⬛",
    Vegetation.WATERLINE: "🌊",
}


def print_grid(model: FireModel, report: StepReport = None) -> None:
    """
    Print a simple representation of the grid to console.

    Args:
        model: The FireModel instance to visualize
        report: Cells changed by the last step, unused
    """
    burnt_out = model.params.burnt_out
    grid_str = ""
    for row in range(model.grid.height):
        for col in range(model.grid.width):
            degree = model.grid.burn_degree[row, col]
            if degree == 0:
                grid_str += VEGETATION_SYMBOLS[Vegetation(int(model.grid.vegetation[row, col]))]
            elif degree < burnt_out:
                grid_str += "🔥"
            else:
                grid_str += "🟫"
        grid_str += "\n"
    print(f"\n--- STEP {model.step_count} ---")
    print(grid_str)


def main():
    """Run the fire spread simulation."""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    # Simulation parameters
    WIDTH = 20
    HEIGHT = 12
    STEP_INTERVAL = 0.2  # seconds between frames

    grid = FireGrid.create(WIDTH, HEIGHT, Vegetation.FOREST, Density.NORMAL)
    # A river and a road across the map
    for col in range(WIDTH):
        grid.paint_region(HEIGHT // 3, col, Vegetation.WATERLINE, Density.NO_VEGETATION)
    for row in range(HEIGHT):
        grid.paint_region(row, (2 * WIDTH) // 3, Vegetation.PRIMARY_ROAD, Density.NO_VEGETATION)

    params = SimulationParams(base_prob=0.5, wind_speed=4.0, max_burn=2)

    print("--- CREATING MODEL ---")
    model = FireModel(grid, params, seed=42)
    model.log_parameters()
    model.set_fire()
    print_grid(model)

    summary = model.simulate(observer=print_grid, step_interval=STEP_INTERVAL)

    print("\nFire has been extinguished.")
    print(f"Steps: {summary.step_count}, burnt: {burn_percentage(grid):.1f}%")
    print(f"Fire centre: {fire_centre(grid)}")


if __name__ == "__main__":
    main()
