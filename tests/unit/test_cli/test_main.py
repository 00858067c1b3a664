"""Tests for the command line entry point."""

import asyncio
import io

import pytest


def _collaborator(url="https://feed.test/items?q=x"):
    from scrollfeed.main import ConsoleCollaborator

    return ConsoleCollaborator(page_url=url, out=io.StringIO())


def test_console_collaborator_writes_one_line_per_segment():
    collaborator = _collaborator()

    collaborator.render(["a", "b"])
    collaborator.render("<li>one</li>\n<li>two</li>")

    assert collaborator.out.getvalue() == '["a", "b"]\n<li>one</li> <li>two</li>\n'
    assert collaborator.rendered == 2


def test_console_collaborator_tracks_page_url():
    collaborator = _collaborator()

    collaborator.persist_param("segment", 3)

    assert collaborator.page_url == "https://feed.test/items?q=x&segment=3"
    assert collaborator.get_data_params() == "q=x&segment=3"


def test_build_settings_overrides():
    from scrollfeed.main import build_parser, build_settings

    args = build_parser().parse_args(
        ["https://feed.test/items", "--segment", "3", "--param", "page", "--html", "--initial"]
    )

    settings = build_settings(args, "https://feed.test/items")

    assert settings.route == "https://feed.test/items"
    assert settings.segment == 3
    assert settings.segment_param == "page"
    assert settings.payload_shape == "html"
    assert settings.fetch_on_initiate is True
    assert settings.lock_infinite_scroll is False


def test_build_settings_reads_settings_file(temp_config_path):
    from scrollfeed.main import build_parser, build_settings

    temp_config_path.write_text("scroll:\n  segment_param: p\n  lock_infinite_scroll: true\n")
    args = build_parser().parse_args(["https://feed.test/items", "--settings", str(temp_config_path)])

    settings = build_settings(args, "https://feed.test/items")

    assert settings.segment_param == "p"
    assert settings.lock_infinite_scroll is False


def test_drain_renders_until_end_of_stream(server):
    from scrollfeed.config.settings import ScrollSettings
    from scrollfeed.main import drain
    from tests.fakes.segment_server import ROUTE

    server.add_pages(2, 3, size=1)
    collaborator = _collaborator(ROUTE + "?q=x")

    code = asyncio.run(drain(ScrollSettings(route=ROUTE), collaborator, http_client=server.client()))

    assert code == 0
    assert collaborator.out.getvalue() == '["item-2-0"]\n["item-3-0"]\n'
    assert collaborator.page_url == ROUTE + "?q=x&segment=3"
    assert server.requested_segments == [2, 3, 4]


def test_drain_stops_after_max_segments(server):
    from scrollfeed.config.settings import ScrollSettings
    from scrollfeed.main import drain
    from tests.fakes.segment_server import ROUTE

    server.add_pages(2, 3, 4, 5)
    collaborator = _collaborator(ROUTE)

    code = asyncio.run(
        drain(ScrollSettings(route=ROUTE), collaborator, max_segments=2, http_client=server.client())
    )

    assert code == 0
    assert collaborator.rendered == 2


def test_drain_reports_failures(server):
    from scrollfeed.config.settings import ScrollSettings
    from scrollfeed.main import drain
    from tests.fakes.segment_server import ROUTE

    server.add_status(2, 500)
    collaborator = _collaborator(ROUTE)

    code = asyncio.run(drain(ScrollSettings(route=ROUTE), collaborator, http_client=server.client()))

    assert code == 1
    assert collaborator.errors[0].status == 500


def test_main_rejects_invalid_settings():
    from scrollfeed.main import main

    assert main(["https://feed.test/items", "--segment", "0"]) == 2


def test_main_requires_url():
    from scrollfeed.main import main

    with pytest.raises(SystemExit):
        main([])
