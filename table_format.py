import logging
import sys
from typing import Callable, Optional

from color_buffer import ColorBuffer, center, pad
from rows import Row, RowShapeError, RowStatus, Rows
from table_options import TableOptions
from width_buffer import ResizingRowBuffer

log = logging.getLogger(__name__)

DELIMITER = " | "

STATUS_COLORS = {
    RowStatus.DELETED: "red",
    RowStatus.UPDATED: "blue",
    RowStatus.INSERTED: "green",
}


def _stdout_sink(line: str) -> None:
    sys.stdout.write(line + "\n")


class TableOutputFormat:
    """Prints rows as a bordered table, re-sizing columns batch by batch."""

    def __init__(
        self,
        options: Optional[TableOptions] = None,
        output: Optional[Callable[[str], None]] = None,
    ):
        self.options = options or TableOptions()
        self.output = output or _stdout_sink
        self.accent = self.options.accent_color

    # ---------- formatting ----------
    def format_row(self, rows: Rows, row: Row, widths) -> ColorBuffer:
        if len(widths) != len(row.values):
            raise RowShapeError(
                f"Row has {len(row.values)} values but {len(widths)} widths"
            )
        buf = ColorBuffer()
        for i, value in enumerate(row.values):
            if i > 0:
                buf.append(DELIMITER, self.accent)
            if row.is_meta:
                cell = center(value, widths[i])
                style = self.accent if rows.is_primary_key(i) else "bold"
            else:
                cell = pad(value, widths[i])
                style = self.accent if rows.is_primary_key(i) else None
            buf.append(cell, style)

        overlay = STATUS_COLORS.get(row.status)
        if overlay is not None:
            buf = ColorBuffer().styled(overlay, buf)
        return buf

    def build_rule(self, widths, length: int) -> ColorBuffer:
        rule = "".join("-" * w + "-+-" for w in widths)
        return ColorBuffer(rule, self.accent).truncate(length)

    # ---------- output ----------
    def _emit(self, buf: ColorBuffer, rule: bool = False) -> None:
        line = ColorBuffer()
        if rule:
            line.append("+-", self.accent).append(buf).append("-+", self.accent)
        else:
            line.append("| ", self.accent).append(buf).append(" |", self.accent)
        self.output(line.render(self.options.color))

    def _header_line(self, rows: Rows, header: Row, widths) -> ColorBuffer:
        return self.format_row(rows, header, widths).truncate(
            self.options.line_width
        )

    def _header_band(self, rows: Rows, header: Row, widths) -> None:
        header_line = self._header_line(rows, header, widths)
        rule = self.build_rule(widths, header_line.visible_length)
        self._emit(rule, rule=True)
        self._emit(header_line)
        self._emit(rule, rule=True)

    def print(self, rows: Rows) -> int:
        """Print every row of ``rows`` and return the number of data rows."""
        opts = self.options
        buffer = ResizingRowBuffer(
            rows,
            batch_size=opts.resolved_batch_size(),
            carry_header_baseline=opts.carry_header_baseline,
            max_column_width=opts.max_column_width,
        )

        index = 0
        header = None
        widths = None
        band_printed = False
        for row, widths in buffer:
            if index == 0:
                header = row
            repeat = (
                opts.header_interval > 0
                and index % opts.header_interval == 0
                and opts.show_header
            )
            if index == 0 or repeat:
                self._header_band(rows, header, widths)
                band_printed = True

            if index != 0:
                line = self.format_row(rows, row, widths).truncate(opts.line_width)
                self._emit(line)
            index += 1

        if band_printed and opts.show_header:
            header_length = self._header_line(rows, header, widths).visible_length
            self._emit(self.build_rule(widths, header_length), rule=True)

        count = max(0, index - 1)
        log.debug("printed %d rows in %d batches", count, buffer.batches_read)
        return count
