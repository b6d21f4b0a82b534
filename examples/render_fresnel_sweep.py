#!/usr/bin/env python3
"""Render a Fresnel reflectance sweep.

This script demonstrates the numerics core end to end. Each pixel maps its
horizontal position to an angle of incidence and its vertical position to an
index of refraction. Every pass places one Halton-jittered sample per pixel,
splits a sky color and a glass tint by the Fresnel reflectance, and folds the
result into the packed accumulator.

Usage:
    python -m examples.render_fresnel_sweep [options]

Options:
    --width WIDTH       Image width in pixels (default: 512)
    --height HEIGHT     Image height in pixels (default: 256)
    --samples SAMPLES   Number of samples per pixel (default: 16)
    --output OUTPUT     Output file path (default: fresnel_sweep.png)
    --quiet             Suppress progress output

Example:
    python -m examples.render_fresnel_sweep --width 256 --height 128 --samples 8
"""

import argparse
import logging
import sys
import time
from pathlib import Path

import taichi as ti

logger = logging.getLogger("examples.render_fresnel_sweep")

# Range of indices of refraction along the vertical axis (bottom to top)
MIN_IOR = 1.0
MAX_IOR = 2.5


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a Fresnel reflectance sweep.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=512,
        help="Image width in pixels (default: 512)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=256,
        help="Image height in pixels (default: 256)",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=16,
        help="Number of samples per pixel (default: 16)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="fresnel_sweep.png",
        help="Output file path (default: fresnel_sweep.png)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def render_fresnel_sweep(
    width: int = 512,
    height: int = 256,
    num_samples: int = 16,
    output_path: str = "fresnel_sweep.png",
) -> Path:
    """Render the sweep and save it to file.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        num_samples: Number of samples per pixel.
        output_path: Output file path (PNG).

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    import taichi.math as tm

    from src.rtcore.color.export import save_png
    from src.rtcore.color.progressive import PackedAccumulator
    from src.rtcore.optics.fresnel import ti_fresnel
    from src.rtcore.sampling.halton import ti_halton_jitter

    vec3 = tm.vec3

    # Samples in image orientation: row 0 is the top of the image
    samples = ti.Vector.field(3, dtype=ti.f32, shape=(height, width))

    @ti.kernel
    def shade_pass(sample_index: ti.i32):
        sky = vec3(1.4, 1.6, 2.0)
        tint = vec3(0.1, 0.3, 0.25)
        normal = vec3(0.0, 1.0, 0.0)
        for row, col in samples:
            offset = ti_halton_jitter(sample_index)
            x = (ti.cast(col, ti.f32) + offset.x) / width
            y = (ti.cast(height - 1 - row, ti.f32) + offset.y) / height

            theta = x * 0.5 * tm.pi
            incident = vec3(ti.sin(theta), -ti.cos(theta), 0.0)
            ior = MIN_IOR + (MAX_IOR - MIN_IOR) * y

            kr = ti_fresnel(incident, normal, ior)
            samples[row, col] = kr * sky + (1.0 - kr) * tint

    accumulator = PackedAccumulator(width, height)
    logger.info("Rendering %d samples per pixel (%dx%d)", num_samples, width, height)

    start_time = time.time()
    for sample_index in range(1, num_samples + 1):
        shade_pass(sample_index)
        accumulator.accumulate(samples.to_numpy())
        logger.debug("Progress: %d/%d samples", accumulator.sample_count, num_samples)

    output_file = Path(output_path)
    save_png(accumulator, str(output_file))

    logger.info("Saved to: %s", output_file.absolute())
    logger.info("Total time: %.2fs", time.time() - start_time)

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()
    logging.basicConfig(
        level=logging.WARNING if args.quiet else logging.DEBUG,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Use GPU if available, fall back to CPU
    try:
        ti.init(arch=ti.gpu)
    except Exception:
        ti.init(arch=ti.cpu)

    try:
        render_fresnel_sweep(
            width=args.width,
            height=args.height,
            num_samples=args.samples,
            output_path=args.output,
        )
        return 0
    except Exception as e:
        logger.error("Error: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
