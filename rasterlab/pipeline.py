"""
Pipeline Orchestration Module

Loads a picture, applies a chain of transforms and writes the result.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any

from .constants import (
    Operation,
    DEFAULT_BOX_SIZE,
    DFT_METHOD_DIRECT,
)
from .core.color import parse_color
from .core.picture import RasterImage
from .core.quadrilateral import Quadrilateral
from .errors import DimensionMismatch
from .imaging.reader import load_image, save_image
from .similarity.cosine import cosine_similarity
from .spectral.dft import DFTOutput
from .transform.convertor import ImageTransformer


logger = logging.getLogger(__name__)


@dataclass
class PipelineConfig:
    """Configuration for pipeline execution."""
    input_image: str
    output_image: str
    operations: List[str] = field(default_factory=lambda: [Operation.GRAYSCALE])
    box_size: int = DEFAULT_BOX_SIZE
    degrees: float = 0.0
    clip_box: Optional[Quadrilateral] = None
    screen_color: int = 0xFF00FF00
    background_image: Optional[str] = None
    compare_image: Optional[str] = None
    dft_method: str = DFT_METHOD_DIRECT
    verbose: bool = False


@dataclass
class PipelineResult:
    """Result from full pipeline execution."""
    input_file: str
    output_file: Optional[str]
    operations_applied: List[str]
    width: int
    height: int
    similarity: Optional[float]
    dft: Optional[DFTOutput]
    warnings: List[str]
    processing_time: float

    def summary(self) -> Dict[str, Any]:
        """Plain-dict summary for logging or JSON output."""
        data = {
            "input_file": self.input_file,
            "output_file": self.output_file,
            "operations_applied": self.operations_applied,
            "width": self.width,
            "height": self.height,
            "similarity": None if self.similarity is None else round(self.similarity, 6),
            "warnings": self.warnings,
            "processing_time": round(self.processing_time, 3),
        }
        if self.dft is not None:
            amplitude = self.dft.amplitude.as_array()
            data["dft"] = {
                "rows": self.dft.rows,
                "columns": self.dft.columns,
                "dc_amplitude": round(float(amplitude[0, 0]), 6),
                "peak_amplitude": round(float(amplitude.max()), 6),
            }
        return data


def parse_operations(ops_str: str) -> List[str]:
    """
    Parse a comma separated list of operation names.

    Examples:
        "grayscale" -> ["grayscale"]
        "mirror, negative" -> ["mirror", "negative"]
        "box-paint" -> ["box_paint"]

    Args:
        ops_str: Operation list

    Returns:
        Operation names in order

    Raises:
        ValueError: If the list is empty or names an unknown operation
    """
    operations = []
    for part in ops_str.split(","):
        name = part.strip().lower().replace("-", "_")
        if not name:
            continue
        if name not in Operation.ALL:
            raise ValueError(
                f"Unknown operation '{part.strip()}', expected one of: {', '.join(Operation.ALL)}"
            )
        operations.append(name)

    if not operations:
        raise ValueError("No operations given")
    return operations


def parse_clip_box(box_str: str) -> Quadrilateral:
    """
    Parse 'x1,y1,x2,y2' (inclusive corners) into a Quadrilateral.

    Raises:
        ValueError: If the string does not hold four integers
    """
    parts = [p.strip() for p in box_str.split(",")]
    if len(parts) != 4:
        raise ValueError(f"Invalid clip box format: {box_str}")
    try:
        x1, y1, x2, y2 = (int(p) for p in parts)
    except ValueError:
        raise ValueError(f"Invalid clip box format: {box_str}")
    return Quadrilateral(x1, y1, x2, y2)


def apply_operation(
    image: RasterImage,
    operation: str,
    config: PipelineConfig,
    background: Optional[RasterImage] = None
) -> RasterImage:
    """
    Apply one named transform.

    Args:
        image: Current picture
        operation: Operation name (not "dft")
        config: Pipeline configuration for operation parameters
        background: Background picture for green_screen

    Returns:
        Transformed picture
    """
    transformer = ImageTransformer(image)

    if operation == Operation.GRAYSCALE:
        return transformer.grayscale()
    if operation == Operation.RED:
        return transformer.red_channel()
    if operation == Operation.MIRROR:
        return transformer.mirror()
    if operation == Operation.NEGATIVE:
        return transformer.negative()
    if operation == Operation.POSTERIZE:
        return transformer.posterize()
    if operation == Operation.CLIP:
        if config.clip_box is None:
            raise ValueError("clip requires a clipping box")
        return transformer.clip(config.clip_box)
    if operation == Operation.DENOISE:
        return transformer.denoise()
    if operation == Operation.WEATHER:
        return transformer.weather()
    if operation == Operation.BOX_PAINT:
        return transformer.box_paint(config.box_size)
    if operation == Operation.ROTATE:
        return transformer.rotate(config.degrees)
    if operation == Operation.GREEN_SCREEN:
        if background is None:
            raise ValueError("green_screen requires a background picture")
        return transformer.green_screen(config.screen_color, background)

    raise ValueError(f"Unknown operation: {operation}")


def run_operations(
    image: RasterImage,
    config: PipelineConfig,
    background: Optional[RasterImage] = None
):
    """
    Apply the configured operations in order.

    Each transform reads the output of the previous one. "dft" analyses the
    current picture without changing it.

    Returns:
        Tuple of (final picture, last DFTOutput or None)
    """
    current = image
    dft_output = None

    for operation in config.operations:
        step_start = time.time()
        if operation == Operation.DFT:
            dft_output = ImageTransformer(current).dft(config.dft_method)
        else:
            current = apply_operation(current, operation, config, background)

        if config.verbose:
            logger.debug(
                f"  {operation}: {current.width()}x{current.height()} "
                f"({time.time() - step_start:.2f}s)"
            )

    return current, dft_output


def build_config(args) -> PipelineConfig:
    """Create a PipelineConfig from parsed command-line arguments."""
    operations = parse_operations(args.ops)
    clip_box = parse_clip_box(args.clip) if getattr(args, "clip", None) else None

    return PipelineConfig(
        input_image=args.input,
        output_image=args.output,
        operations=operations,
        box_size=args.box_size,
        degrees=args.degrees,
        clip_box=clip_box,
        screen_color=parse_color(args.screen_color),
        background_image=getattr(args, "background", None),
        compare_image=getattr(args, "compare", None),
        dft_method=args.dft_method,
        verbose=args.verbose,
    )


def run_pipeline(args) -> PipelineResult:
    """
    Run the full transform pipeline.

    Args:
        args: Parsed command-line arguments

    Returns:
        PipelineResult with the written file and analysis values
    """
    start_time = time.time()

    config = build_config(args)

    # Setup logging
    log_level = logging.DEBUG if config.verbose else logging.INFO
    logging.basicConfig(level=log_level, format='%(message)s')

    logger.info(f"Processing: {config.input_image}")
    logger.info(f"Operations: {', '.join(config.operations)}")

    warnings = []

    image = load_image(config.input_image)

    background = None
    if config.background_image:
        background = load_image(config.background_image)

    result_image, dft_output = run_operations(image, config, background)

    output_path = save_image(result_image, config.output_image)

    similarity = None
    if config.compare_image:
        reference = load_image(config.compare_image)
        try:
            similarity = cosine_similarity(reference, result_image)
            logger.info(f"Cosine similarity vs {config.compare_image}: {similarity:.6f}")
        except DimensionMismatch as e:
            warnings.append(f"Similarity skipped: {e}")
            logger.warning(f"Similarity skipped: {e}")

    processing_time = time.time() - start_time

    # Summary
    logger.info(f"\nSummary:")
    logger.info(f"  Input size: {image.width()}x{image.height()}")
    logger.info(f"  Output size: {result_image.width()}x{result_image.height()}")
    logger.info(f"  Output written: {output_path}")
    logger.info(f"  Processing time: {processing_time:.1f}s")

    if warnings and config.verbose:
        logger.info(f"\nWarnings ({len(warnings)}):")
        for w in warnings:
            logger.info(f"  - {w}")

    return PipelineResult(
        input_file=config.input_image,
        output_file=str(output_path),
        operations_applied=list(config.operations),
        width=result_image.width(),
        height=result_image.height(),
        similarity=similarity,
        dft=dft_output,
        warnings=warnings,
        processing_time=processing_time,
    )
