"""
Huescale Palette Orchestrator
Chains color parsing, pattern loading, palette generation and formatting for
single, batch and transform requests.
"""
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Tuple, Union

from huescale.config import Config, config
from huescale.errors import describe_error
from huescale.schemas import (
    BatchRequest, BatchResult, ColorAnchor, GenerationFailure, PaletteRequest, PaletteResult,
    TransformedColor, TransformFailure, TransformRequest, TransformResult,
)
from huescale.services.colors import ColorError, OKLCHColor, parse_color
from huescale.services.colors.formatter import format_color, format_palette_stops
from huescale.services.colors.transform import (
    apply_optical_appearance_many, is_transformation_viable,
)
from huescale.services.observability import performance_monitor
from huescale.services.palette.generator import PaletteGenerationError, generate_palette_from_stop
from huescale.services.patterns import FilePatternLoader, PatternLoader
from huescale.utils.ids import generate_batch_id, utc_timestamp
from huescale.utils.logging import get_logger


class PaletteService:
    """Palette generation with a pluggable pattern loader."""

    def __init__(self, loader: Optional[PatternLoader] = None, settings: Config = config):
        settings.validate()
        self.loader = loader or FilePatternLoader()
        self.settings = settings
        self.log = get_logger()

    def _resolve_pattern_source(self, pattern_source: Optional[str]) -> str:
        return pattern_source or self.settings.PATTERN_SOURCE

    def _generate_from_color(
        self,
        color: OKLCHColor,
        input_color: str,
        anchor_stop: int,
        output_format: str,
        palette_name: str,
        pattern_source: Optional[str]
    ) -> PaletteResult:
        pattern = self.loader.load_pattern(self._resolve_pattern_source(pattern_source))
        palette = generate_palette_from_stop(color, anchor_stop, pattern, palette_name)
        return PaletteResult(
            name=palette.name,
            input_color=input_color,
            anchor_stop=anchor_stop,
            output_format=output_format,
            stops=format_palette_stops(palette.stops, output_format)
        )

    def generate(self, request: PaletteRequest) -> PaletteResult:
        """
        Generate a single formatted palette.

        Raises:
            PaletteGenerationError: Wrapping any parse, load or generation failure
        """
        try:
            with performance_monitor("palette_generation", anchor_stop=request.anchor_stop):
                color = parse_color(request.input_color)
                return self._generate_from_color(
                    color,
                    request.input_color,
                    request.anchor_stop,
                    request.output_format,
                    request.palette_name,
                    request.pattern_source
                )
        except Exception as e:
            raise PaletteGenerationError(
                f"Failed to generate palette for {request.input_color}: {describe_error(e)}", e
            )

    def generate_batch(self, request: BatchRequest) -> BatchResult:
        """
        Generate one palette per (color, stop) pair.

        Failures are captured per item; the batch only fails when every item fails.

        Raises:
            PaletteGenerationError: If all palette generations failed
        """
        batch_id = generate_batch_id("batch")
        self.log.info(f"Starting batch of {len(request.pairs)} palette(s)", extra={"batch_id": batch_id})

        def run(pair: ColorAnchor) -> Union[PaletteResult, GenerationFailure]:
            try:
                return self.generate(PaletteRequest(
                    input_color=pair.color,
                    anchor_stop=pair.stop,
                    output_format=request.output_format,
                    palette_name=f"{request.palette_group_name}-{pair.color}",
                    pattern_source=request.pattern_source
                ))
            except PaletteGenerationError as e:
                self.log.warning(e.full_message(), extra={"batch_id": batch_id})
                return GenerationFailure(color=pair.color, stop=pair.stop, error=e.message)

        with performance_monitor("palette_batch", size=len(request.pairs)):
            with ThreadPoolExecutor(max_workers=self.settings.MAX_CONCURRENCY) as executor:
                outcomes = list(executor.map(run, request.pairs))

        palettes = [outcome for outcome in outcomes if isinstance(outcome, PaletteResult)]
        failures = [outcome for outcome in outcomes if isinstance(outcome, GenerationFailure)]

        if not palettes:
            details = ", ".join(f"{failure.color} ({failure.error})" for failure in failures)
            raise PaletteGenerationError(f"All palette generations failed: {details}")

        self.log.info(
            f"Batch complete: {len(palettes)} succeeded, {len(failures)} failed",
            extra={"batch_id": batch_id}
        )
        return BatchResult(
            batch_id=batch_id,
            group_name=request.palette_group_name,
            output_format=request.output_format,
            generated_at=utc_timestamp(),
            palettes=palettes,
            failures=failures
        )

    def transform(self, request: TransformRequest) -> TransformResult:
        """
        Apply the reference color's appearance to every target hue.

        When request.anchor_stop is set, each transformed color also becomes
        the anchor of a generated palette.

        Raises:
            PaletteGenerationError: If the reference cannot be parsed or every target fails
        """
        batch_id = generate_batch_id("transform")

        try:
            reference = parse_color(request.reference)
        except ColorError as e:
            raise PaletteGenerationError(f"Invalid reference color {request.reference}", e)

        parsed: List[Tuple[str, OKLCHColor]] = []
        failures: List[TransformFailure] = []
        for target in request.targets:
            try:
                parsed.append((target, parse_color(target)))
            except ColorError as e:
                failures.append(TransformFailure(target=target, error=describe_error(e)))

        with performance_monitor("optical_transform", size=len(parsed)):
            transformed = apply_optical_appearance_many(
                reference, [color for _, color in parsed], self.settings.MAX_CONCURRENCY
            )

        results: List[TransformedColor] = []
        for (target, target_color), outcome in zip(parsed, transformed):
            if isinstance(outcome, ColorError):
                failures.append(TransformFailure(target=target, error=describe_error(outcome)))
                continue

            try:
                palette = None
                if request.anchor_stop is not None:
                    palette = self._generate_from_color(
                        outcome,
                        target,
                        request.anchor_stop,
                        request.output_format,
                        f"{request.palette_group_name}-{target}",
                        request.pattern_source
                    )
                results.append(TransformedColor(
                    target=target,
                    value=format_color(outcome, request.output_format),
                    viable=is_transformation_viable(reference, target_color),
                    palette=palette
                ))
            except Exception as e:
                self.log.warning(f"Transform for {target} failed: {describe_error(e)}", extra={"batch_id": batch_id})
                failures.append(TransformFailure(target=target, error=describe_error(e)))

        if not results:
            details = ", ".join(f"{failure.target} ({failure.error})" for failure in failures)
            raise PaletteGenerationError(f"All transformations failed: {details}")

        return TransformResult(
            batch_id=batch_id,
            reference=request.reference,
            output_format=request.output_format,
            generated_at=utc_timestamp(),
            results=results,
            failures=failures
        )
