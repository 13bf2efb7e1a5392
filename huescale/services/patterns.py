"""
Pattern loading for palette generation.

Loaders turn an example palette source into an AnalyzedPalette or a smoothed,
generation-ready TransformationPattern. The file loader reads JSON palette
files and caches learned patterns per path; the memory loader serves
preloaded values for tests and embedding.
"""

import json
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Mapping, Optional, Sequence, Union

from loguru import logger
from pydantic import ValidationError

from huescale.errors import HuescaleError
from huescale.schemas import ExamplePaletteFile
from huescale.services.colors import ColorError, parse_color
from huescale.services.learning import AnalyzedPalette, PaletteStop, TransformationPattern
from huescale.services.learning.interpolation import InterpolationError, smooth_pattern
from huescale.services.learning.statistics import PatternExtractionError, extract_patterns
from huescale.services.observability import performance_monitor

PathLike = Union[str, Path]


class PatternLoadError(HuescaleError):
    """Loading a palette or pattern failed."""
    kind = "PatternLoadError"


def load_palette_file(path: PathLike) -> AnalyzedPalette:
    """
    Load an example palette file and convert its colors to OKLCH.

    Args:
        path: JSON file of the form {"name": ..., "stops": [{"position": 100, "hex": "#..."}]}

    Raises:
        PatternLoadError: If the file cannot be read, decoded, validated or parsed
    """
    file_path = Path(path)
    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise PatternLoadError(f"Failed to read palette file: {file_path}", e)

    try:
        raw = json.loads(content)
    except json.JSONDecodeError as e:
        raise PatternLoadError(f"Failed to parse JSON: {file_path}", e)

    return palette_from_data(raw, str(file_path))


def palette_from_data(data: Mapping, source: str = "<memory>") -> AnalyzedPalette:
    """Validate decoded palette data and convert its colors to OKLCH."""
    try:
        example = ExamplePaletteFile.model_validate(data)
    except ValidationError as e:
        raise PatternLoadError(f"Invalid palette schema: {source}", e)

    try:
        stops = tuple(
            PaletteStop(position=stop.position, color=parse_color(stop.hex))
            for stop in example.stops
        )
    except ColorError as e:
        raise PatternLoadError(f"Failed to convert colors to OKLCH: {source}", e)

    return AnalyzedPalette(name=example.name, stops=stops)


def learn_pattern(palettes: Sequence[AnalyzedPalette], source: str) -> TransformationPattern:
    """Extract and smooth a pattern, wrapping failures as PatternLoadError."""
    try:
        pattern = extract_patterns(palettes)
    except PatternExtractionError as e:
        raise PatternLoadError(f"Failed to extract pattern from: {source}", e)

    try:
        return smooth_pattern(pattern)
    except InterpolationError as e:
        raise PatternLoadError(f"Failed to smooth pattern from: {source}", e)


class PatternLoader(ABC):
    """Abstract source of example palettes and learned patterns."""

    @abstractmethod
    def load_palette(self, source: str) -> AnalyzedPalette:
        """Load a single example palette."""
        pass

    @abstractmethod
    def load_pattern(self, source: str) -> TransformationPattern:
        """Load a smoothed, generation-ready pattern."""
        pass


class FilePatternLoader(PatternLoader):
    """Reads example palettes from disk; learned patterns are cached per resolved path."""

    def __init__(self):
        self._cache: Dict[str, TransformationPattern] = {}
        self._lock = threading.Lock()

    def load_palette(self, source: str) -> AnalyzedPalette:
        return load_palette_file(source)

    def load_pattern(self, source: str) -> TransformationPattern:
        key = str(Path(source).resolve())
        with self._lock:
            cached = self._cache.get(key)
        if cached is not None:
            return cached

        with performance_monitor("pattern_load", source=key):
            pattern = learn_pattern([load_palette_file(source)], source)

        with self._lock:
            self._cache.setdefault(key, pattern)
        logger.info(f"Loaded pattern from {source} (confidence {pattern.metadata.confidence:.2f})")
        return pattern

    def load_pattern_from_files(self, sources: Sequence[str]) -> TransformationPattern:
        """Learn one pattern from several example palette files."""
        if not sources:
            raise PatternLoadError("No palette files provided")
        palettes = [load_palette_file(source) for source in sources]
        return learn_pattern(palettes, ", ".join(str(source) for source in sources))

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()


class MemoryPatternLoader(PatternLoader):
    """Dictionary-backed loader."""

    def __init__(
        self,
        patterns: Optional[Mapping[str, TransformationPattern]] = None,
        palettes: Optional[Mapping[str, AnalyzedPalette]] = None
    ):
        self.patterns = dict(patterns or {})
        self.palettes = dict(palettes or {})

    def load_palette(self, source: str) -> AnalyzedPalette:
        palette = self.palettes.get(source)
        if palette is None:
            raise PatternLoadError(f"Palette not found: {source}")
        return palette

    def load_pattern(self, source: str) -> TransformationPattern:
        pattern = self.patterns.get(source)
        if pattern is not None:
            return pattern
        if source in self.palettes:
            return learn_pattern([self.palettes[source]], source)
        raise PatternLoadError(f"Pattern not found: {source}")
