#!/usr/bin/env python3
"""
Demo script showing Poisson disc sampling on a small level layout.
"""

from py_poisson.core import (
    AleaPRNG,
    MapSection,
    PoissonDisc,
    analyze_points,
    render_occupancy,
)
from py_poisson.logging_config import configure_logging


def main():
    """Sample a level, reserve a base area and print the result."""
    configure_logging()

    print("Py-Poisson Level Layout Demo")
    print("=" * 40)

    width, height = 64, 32
    minimum_distance = 4
    base = MapSection.rectangle(center=(12, 16), dimensions=(12, 12))

    sampler = PoissonDisc(minimum_distance, (width, height), rng=AleaPRNG("demo123"))

    # Sparse pass for large objects, then fill in around them
    landmarks = sampler.generate(excluded_sections=[base], max_points=12)
    print(f"\nLandmarks ({len(landmarks)}):")
    print(render_occupancy(landmarks, (width, height), filled="#", empty="."))

    result = sampler.sample(excluded_sections=[base], existing_points=landmarks)
    print(f"\nFill ({len(result.points)} points):")
    print(render_occupancy(result.points, (width, height), filled="o", empty="."))

    report = analyze_points(landmarks + result.points, minimum_distance, (width, height))
    print("\nStatistics:")
    print(f"  Points: {report.count}")
    print(f"  Closest pair: {report.min_distance:.2f}")
    print(f"  Mean nearest neighbour: {report.mean_nearest_distance:.2f}")
    print(f"  Violating pairs: {report.violating_pairs}")
    print(f"  Coverage: {report.coverage:.1%}")
    print(f"  Candidates tried: {result.stats.candidates}")


if __name__ == "__main__":
    main()
