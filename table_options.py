from dataclasses import dataclass, fields, replace
from typing import Optional

from color_buffer import color_code
from width_buffer import DEFAULT_BATCH_SIZE


@dataclass(frozen=True)
class TableOptions:
    max_width: int = 80
    header_interval: int = 100
    show_header: bool = True
    batch_size: Optional[int] = None
    carry_header_baseline: bool = True
    max_column_width: Optional[int] = 70
    accent_color: str = "cyan"
    null_value: str = "NULL"
    color: bool = True

    def __post_init__(self):
        if self.max_width < 0:
            raise ValueError(f"max_width must not be negative, got {self.max_width}")
        if self.header_interval < 0:
            raise ValueError(
                f"header_interval must not be negative, got {self.header_interval}"
            )
        if self.batch_size is not None and self.batch_size < 1:
            raise ValueError(f"batch_size must be at least 1, got {self.batch_size}")
        if self.max_column_width is not None and self.max_column_width < 0:
            raise ValueError(
                f"max_column_width must not be negative, got {self.max_column_width}"
            )
        color_code(self.accent_color)

    def resolved_batch_size(self) -> int:
        if self.batch_size is not None:
            return self.batch_size
        return self.header_interval or DEFAULT_BATCH_SIZE

    @property
    def line_width(self) -> Optional[int]:
        """Visible characters left for a row once the borders are drawn.

        None when ``max_width`` is 0, which turns truncation off.
        """
        if self.max_width == 0:
            return None
        return max(0, self.max_width - 4)

    @classmethod
    def from_config(cls, cfg: dict, **overrides) -> "TableOptions":
        names = {f.name for f in fields(cls)}
        values = {}
        for key, value in (cfg or {}).items():
            name = key.lower()
            if name in names:
                values[name] = value
        options = cls(**values)
        updates = {k: v for k, v in overrides.items() if v is not None}
        unknown = set(updates) - names
        if unknown:
            raise TypeError(f"Unknown table options: {', '.join(sorted(unknown))}")
        return replace(options, **updates) if updates else options
