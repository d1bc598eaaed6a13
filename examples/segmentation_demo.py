#!/usr/bin/env python3
"""
Example script demonstrating the usage of region growing segmentation.
"""

import argparse
import numpy as np
import matplotlib.pyplot as plt
from regrow import colorize, load_image_rgb, segment

def create_seeds(image_shape, step=40, margin=10):
    """Place seeds on a regular grid, a stand-in for clicked points."""
    height, width = image_shape[:2]
    return [(x, y)
            for x in range(margin, height - margin, step)
            for y in range(margin, width - margin, step)]

def visualize_results(image, seeds, segmentation):
    """Visualize the input image, seeds, and segmentation result."""
    fig, axes = plt.subplots(1, 3, figsize=(15, 5))

    # Plot original image
    axes[0].imshow(image)
    axes[0].set_title('Original Image')
    axes[0].axis('off')

    # Plot seeds as (column, row) points
    axes[1].imshow(image)
    if seeds:
        rows, cols = zip(*seeds)
        axes[1].scatter(cols, rows, c='red', s=12)
    axes[1].set_title('Seeds' if seeds else 'Seeds\n(exhaustive mode)')
    axes[1].axis('off')

    # Plot segmentation
    axes[2].imshow(colorize(segmentation))
    axes[2].set_title('Segmentation Result')
    axes[2].axis('off')

    plt.tight_layout()
    plt.show()

def main():
    parser = argparse.ArgumentParser(description='Test region growing segmentation on an image')
    parser.add_argument('image_path', help='Path to the input image')
    parser.add_argument('--threshold', type=float, default=10.0,
                       help='Color distance threshold (default: 10)')
    parser.add_argument('--seed-step', type=int, default=0,
                       help='Grid spacing of generated seeds, 0 for exhaustive mode (default: 0)')
    args = parser.parse_args()

    # Load the image
    print("Loading image...")
    image = load_image_rgb(args.image_path)

    # Create seeds
    seeds = None
    if args.seed_step > 0:
        print("Creating seeds...")
        seeds = create_seeds(image.shape, step=args.seed_step)

    # Run segmentation
    print("Running region growing...")
    result = segment(image, args.threshold, seeds=seeds)
    labels = result.labels

    # Print some statistics
    print("\nSegmentation Statistics:")
    print(f"Image shape: {image.shape}")
    print(f"Number of regions: {result.regions}")
    print(f"Iterations: {result.iterations}, reclaimed regions: {result.reclaimed}")
    unassigned = np.sum(labels == 0)
    print(f"Unassigned: {unassigned} pixels ({100 * unassigned / labels.size:.1f}%)")

    # Visualize the results
    print("\nDisplaying visualization...")
    visualize_results(image, seeds, labels)

if __name__ == "__main__":
    main()
