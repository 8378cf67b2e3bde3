"""
Unit tests for the activity feed and the extraction runner.
"""

import logging

from productlens.core.activity import ActivityEntry, ActivityFeed, ActivityLevel
from productlens.core.extract import ProductExtractor
from productlens.core.orchestrator import ExtractionReport, ExtractionRunner
from productlens.core.orchestrator.runner import NOTHING_FOUND_MESSAGE


class TestActivityFeed:
    """Test cases for ActivityFeed."""

    def test_entries_in_order(self):
        feed = ActivityFeed()
        feed.info("one")
        feed.success("two")
        feed.warn("three")

        assert [e.message for e in feed] == ["one", "two", "three"]
        assert [e.level for e in feed] == [ActivityLevel.INFO, ActivityLevel.SUCCESS, ActivityLevel.WARN]
        assert len(feed) == 3

    def test_unique_ids(self):
        feed = ActivityFeed()
        ids = {feed.info(f"entry {i}").id for i in range(50)}
        assert len(ids) == 50

    def test_entry_to_dict(self):
        entry = ActivityFeed().warn("careful")
        data = entry.to_dict()

        assert data["message"] == "careful"
        assert data["level"] == "warn"
        assert data["id"] == entry.id
        assert "created_at" in data

    def test_clear(self):
        feed = ActivityFeed()
        feed.info("x")
        feed.clear()
        assert len(feed) == 0

    def test_mirrors_to_logger(self, caplog):
        logger = logging.getLogger("productlens.test.activity")
        feed = ActivityFeed(logger=logger)

        with caplog.at_level(logging.INFO, logger="productlens.test.activity"):
            feed.success("Found price")
            feed.warn("Nothing here")

        levels = [(r.levelno, r.getMessage()) for r in caplog.records if r.name == logger.name]
        assert levels == [(logging.INFO, "Found price"), (logging.WARNING, "Nothing here")]

    def test_level_values(self):
        assert [level.value for level in ActivityLevel] == ["info", "success", "warn"]
        assert isinstance(ActivityFeed().add("x"), ActivityEntry)


class TestExtractionRunner:
    """Test cases for ExtractionRunner."""

    def test_successful_run(self, amazon_html):
        runner = ExtractionRunner()
        report = runner.run(amazon_html, "https://www.amazon.in/dp/B0TEST")

        assert isinstance(report, ExtractionReport)
        assert report.ok
        assert report.strategy == "amazon"
        assert report.record.price == "$19.99"

        messages = [e.message for e in report.entries]
        assert messages[0] == "Analyzing www.amazon.in with Amazon strategy"
        assert "Found price: $19.99" in messages
        assert all(e.level != ActivityLevel.WARN for e in report.entries)

    def test_partial_run_reports_missing(self, generic_html):
        report = ExtractionRunner().run(generic_html, "https://widgets.example/pro")

        assert report.strategy == "generic"
        by_message = {e.message: e.level for e in report.entries}
        assert by_message["Found title: Widget Pro"] == ActivityLevel.SUCCESS
        assert by_message["No price found"] == ActivityLevel.INFO

    def test_nothing_found_warns(self):
        report = ExtractionRunner().run("", "https://example.com")

        assert not report.ok
        assert report.entries[-1].level == ActivityLevel.WARN
        assert report.entries[-1].message == NOTHING_FOUND_MESSAGE

    def test_long_values_are_shortened_in_feed(self):
        description = "word " * 60
        html = f'<meta property="og:description" content="{description}">'
        report = ExtractionRunner().run(html, "https://example.com")

        entry = next(e for e in report.entries if e.message.startswith("Found description"))
        assert entry.message.endswith("...")
        assert len(report.record.description) > len(entry.message)

    def test_shared_feed_report_entries(self, amazon_html):
        feed = ActivityFeed()
        feed.info("previous run")
        runner = ExtractionRunner(ProductExtractor(), feed)

        report = runner.run(amazon_html, "https://amazon.com/dp/1")

        assert feed.entries[0].message == "previous run"
        assert report.entries == feed.entries[1:]

    def test_source_without_host(self):
        report = ExtractionRunner().run("<title>x</title>", "")
        assert report.entries[0].message == "Analyzing page with Generic strategy"

    def test_malformed_url(self):
        report = ExtractionRunner().run("<title>T</title>", "http://[amazon.com")

        assert report.strategy == "amazon"
        assert report.record.title == "T"
        assert report.entries[0].message == "Analyzing http://[amazon.com with Amazon strategy"

    def test_debug_logs_carry_context(self, caplog, amazon_html):
        caplog.set_level(logging.DEBUG, logger="productlens")

        ExtractionRunner().run(amazon_html, "https://amazon.com/dp/1")

        selected = next(r for r in caplog.records if r.getMessage() == "Selected amazon strategy")
        assert selected.strategy == "amazon"
        assert selected.url == "https://amazon.com/dp/1"

    def test_report_to_dict(self, amazon_html):
        data = ExtractionRunner().run(amazon_html, "https://amazon.com/dp/1").to_dict()

        assert data["strategy"] == "amazon"
        assert data["record"]["title"] == "Echo Dot (5th Gen)"
        assert data["activity"][0]["level"] == "info"
        assert data["elapsed_ms"] >= 0
