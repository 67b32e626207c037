"""
Chart data embedded in the stats page.

The stats page draws its "cards per day" and "cards by level" charts
with Chart.js.  In a browser the data can be read back from the live
chart objects; here it is recovered from the inline scripts that
construct them::

    new Chart(document.getElementById('chart'), {
        type: 'bar',
        data: {
            labels: ['7 days ago', ..., 'Today'],
            datasets: [{label: 'New cards', data: [3, 0, ...]}, ...]
        },
        ...
    });

Only the ``labels`` array and each dataset's ``label`` and ``data`` are
read.  Array literals are evaluated with ``ast.literal_eval`` after
mapping the JavaScript constants ``null``/``true``/``false``.
"""

from __future__ import annotations

import ast
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from bs4 import BeautifulSoup

from .text import ParseError

CHART_START_RE = re.compile(r"new\s+Chart\s*\(")
CANVAS_ID_RE = re.compile(r"""getElementById\(\s*(['"])([\w-]+)\1\s*\)""")
LABELS_RE = re.compile(r"""['"]?\blabels['"]?\s*:\s*(\[.*?\])""", re.S)
DATASET_LABEL_RE = re.compile(r"""['"]?\blabel['"]?\s*:\s*(['"])(.*?)(?<!\\)\1""", re.S)
DATA_RE = re.compile(r"""['"]?\bdata['"]?\s*:\s*(\[.*?\])""", re.S)
DATASETS_RE = re.compile(r"""['"]?\bdatasets['"]?\s*:\s*\[""")
FIRST_ARG_RE = re.compile(r"\s*([^,]+?)\s*,")
JS_CONSTANTS = {"null": "None", "true": "True", "false": "False", "undefined": "None"}
JS_CONSTANT_RE = re.compile(r"\b(null|true|false|undefined)\b")


@dataclass(frozen=True)
class Dataset:
    label: str
    data: Tuple[Any, ...]


@dataclass(frozen=True)
class ChartData:
    labels: Tuple[Any, ...]
    datasets: Tuple[Dataset, ...]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ChartData":
        """Build from the shape of a Chart.js ``chart.data`` object."""
        return cls(
            labels=tuple(data.get("labels", ())),
            datasets=tuple(
                Dataset(label=ds.get("label", ""), data=tuple(ds.get("data", ())))
                for ds in data.get("datasets", ())
            ),
        )


def _js_array(literal: str) -> List[Any]:
    try:
        value = ast.literal_eval(JS_CONSTANT_RE.sub(lambda m: JS_CONSTANTS[m.group(1)], literal))
    except (SyntaxError, ValueError) as exc:
        raise ParseError(f"cannot read chart array {literal[:80]!r}") from exc
    if not isinstance(value, (list, tuple)):
        raise ParseError(f"chart value is not an array: {literal[:80]!r}")
    return list(value)


def _bracketed(text: str, start: int) -> str:
    """Return the bracketed span opening at ``text[start]``, skipping string literals."""
    depth = 0
    quote = None
    i = start
    while i < len(text):
        ch = text[i]
        if quote:
            if ch == "\\":
                i += 1
            elif ch == quote:
                quote = None
        elif ch in "'\"`":
            quote = ch
        elif ch in "[{(":
            depth += 1
        elif ch in "]})":
            depth -= 1
            if depth == 0:
                return text[start:i + 1]
        i += 1
    raise ParseError("unterminated chart literal")


def _objects(array: str) -> List[str]:
    """Split an array literal of objects into the object literals."""
    objects: List[str] = []
    i = 1
    while True:
        start = array.find("{", i)
        if start == -1:
            return objects
        obj = _bracketed(array, start)
        objects.append(obj)
        i = start + len(obj)


def _parse_dataset(obj: str) -> Dataset:
    # Keys may come in any order.
    label_match = DATASET_LABEL_RE.search(obj)
    label = label_match.group(2) if label_match else ""
    data_match = DATA_RE.search(obj)
    if data_match is None:
        raise ParseError(f'chart dataset "{label}" has no data')
    return Dataset(label=label, data=tuple(_js_array(data_match.group(1))))


def _parse_constructor(body: str) -> ChartData:
    labels_match = LABELS_RE.search(body)
    if labels_match is None:
        raise ParseError("chart has no labels")
    datasets_match = DATASETS_RE.search(body)
    if datasets_match is None:
        raise ParseError("chart has no datasets")
    region = _bracketed(body, datasets_match.end() - 1)

    datasets = [_parse_dataset(obj) for obj in _objects(region)]
    return ChartData(labels=tuple(_js_array(labels_match.group(1))), datasets=tuple(datasets))


def _canvas_id(body: str, preceding: str) -> Optional[str]:
    arg = FIRST_ARG_RE.match(body)
    if arg is None:
        return None
    direct = CANVAS_ID_RE.search(arg.group(1))
    if direct:
        return direct.group(2)
    # new Chart(ctx, ...) with ``ctx = document.getElementById(...)`` earlier.
    assign = re.search(
        rf"\b{re.escape(arg.group(1).strip())}\s*=\s*document\.getElementById\(\s*(['\"])([\w-]+)\1\s*\)",
        preceding,
    )
    return assign.group(2) if assign else None


def extract_charts_from_scripts(scripts: Iterable[str]) -> Dict[str, ChartData]:
    charts: Dict[str, ChartData] = {}
    for script in scripts:
        starts = [m.end() for m in CHART_START_RE.finditer(script)]
        for n, start in enumerate(starts):
            end = starts[n + 1] if n + 1 < len(starts) else len(script)
            chart_id = _canvas_id(script[start:end], script[:start])
            if chart_id is None:
                continue
            charts[chart_id] = _parse_constructor(script[start:end])
    return charts


def extract_charts(soup: BeautifulSoup) -> Dict[str, ChartData]:
    """Map canvas element ids to the chart data drawn on them."""
    return extract_charts_from_scripts(script.string or "" for script in soup.find_all("script"))
