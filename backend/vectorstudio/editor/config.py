"""Editor configuration: constants that shape edits and gestures."""

from __future__ import annotations

from dataclasses import dataclass

from vectorstudio.config import Settings, settings


@dataclass
class EditorConfig:
    """Controls sizing, offsets and gesture gains."""

    # Fallback canvas when a document has neither viewBox nor pixel size
    default_canvas_size: float = 512.0

    # Offset applied to duplicated and pasted nodes (canvas units)
    paste_offset: float = 10.0

    # A drag across the full box dimension roughly doubles the scale
    scale_gain: float = 2.0

    # Degrees of skew per canvas unit of orthogonal drag
    skew_gain: float = 0.5

    # Box dimension used when a node reports zero width/height
    fallback_box_size: float = 100.0

    @classmethod
    def from_settings(cls, source: Settings | None = None) -> EditorConfig:
        source = source or settings
        return cls(
            default_canvas_size=source.default_canvas_size,
            paste_offset=source.paste_offset,
            scale_gain=source.scale_gain,
            skew_gain=source.skew_gain,
        )
