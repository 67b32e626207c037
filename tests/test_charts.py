"""Tests for reading Chart.js data out of inline scripts."""

from __future__ import annotations

import unittest

from bs4 import BeautifulSoup

from jpdbstats.errors import ParseError
from jpdbstats.parse.charts import ChartData, Dataset, extract_charts, extract_charts_from_scripts


class TestExtractCharts(unittest.TestCase):
    def test_direct_canvas_lookup(self) -> None:
        script = """
        new Chart(document.getElementById("chart"), {
            type: 'line',
            data: {labels: ['Today'], datasets: [{label: "New cards", data: [4]}]},
        });
        """
        charts = extract_charts_from_scripts([script])
        self.assertEqual(
            charts["chart"],
            ChartData(labels=("Today",), datasets=(Dataset("New cards", (4,)),)),
        )

    def test_canvas_through_variable(self) -> None:
        script = """
        var first = document.getElementById('chart');
        var second = document.getElementById('chart2').getContext('2d');
        new Chart(first, {data: {labels: ['Yesterday', 'Today'], datasets: [{label: 'New cards', data: [1, 2]}]}});
        new Chart(second, {data: {labels: [1, 2], datasets: [{label: 'Cards', data: [10, null]}]}});
        """
        charts = extract_charts_from_scripts([script])
        self.assertEqual(charts["chart"].labels, ("Yesterday", "Today"))
        self.assertEqual(charts["chart2"].datasets, (Dataset("Cards", (10, None)),))

    def test_option_labels_are_not_datasets(self) -> None:
        script = """
        new Chart(document.getElementById('chart'), {
            data: {labels: ['Today'], datasets: [{label: 'New cards', data: [3]}]},
            options: {scales: {y: {title: {display: true, label: 'Count'}}}}
        });
        """
        charts = extract_charts_from_scripts([script])
        self.assertEqual(len(charts["chart"].datasets), 1)

    def test_dataset_keys_in_any_order(self) -> None:
        script = """
        new Chart(document.getElementById('chart'), {
            data: {
                labels: ['Yesterday', 'Today'],
                datasets: [
                    {data: [5, 6], label: 'New cards'},
                    {backgroundColor: '#f00', data: [1, 0], label: 'Old cards (failed)'},
                    {label: 'Old cards (passed)', data: [9, 8]},
                ]
            }
        });
        """
        charts = extract_charts_from_scripts([script])
        self.assertEqual(
            charts["chart"].datasets,
            (
                Dataset("New cards", (5, 6)),
                Dataset("Old cards (failed)", (1, 0)),
                Dataset("Old cards (passed)", (9, 8)),
            ),
        )

    def test_dataset_without_data_raises(self) -> None:
        script = (
            "new Chart(document.getElementById('chart'), "
            "{data: {labels: ['Today'], datasets: [{label: 'New cards'}, {data: [1], label: 'x'}]}});"
        )
        with self.assertRaisesRegex(ParseError, "New cards"):
            extract_charts_from_scripts([script])

    def test_unknown_canvas_is_skipped(self) -> None:
        script = "new Chart(makeCanvas(), {data: {labels: [], datasets: []}});"
        self.assertEqual(extract_charts_from_scripts([script]), {})

    def test_chart_without_labels_raises(self) -> None:
        script = "new Chart(document.getElementById('chart'), {data: {datasets: []}});"
        with self.assertRaises(ParseError):
            extract_charts_from_scripts([script])

    def test_unreadable_array_raises(self) -> None:
        script = (
            "new Chart(document.getElementById('chart'), "
            "{data: {labels: [days[0]], datasets: []}});"
        )
        with self.assertRaises(ParseError):
            extract_charts_from_scripts([script])

    def test_extract_from_page(self) -> None:
        html = (
            "<html><body><script>var x = 1;</script><script>"
            "new Chart(document.getElementById('chart2'), "
            "{data: {labels: ['1'], datasets: [{label: 'Cards', data: [7]}]}});"
            "</script></body></html>"
        )
        charts = extract_charts(BeautifulSoup(html, "html.parser"))
        self.assertEqual(list(charts), ["chart2"])

    def test_from_dict(self) -> None:
        chart = ChartData.from_dict({"labels": ["Today"], "datasets": [{"label": "New cards", "data": [2]}]})
        self.assertEqual(chart.datasets[0], Dataset("New cards", (2,)))


if __name__ == "__main__":
    unittest.main()
