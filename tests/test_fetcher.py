"""
Tests for the fetch orchestrator against an in-process HTTP server.
"""

from pathlib import Path

from docfetch.api.client import ContentAPIClient
from docfetch.core.fetcher import FetchOrchestrator
from docfetch.models.package import PackageDescriptor


def _run(server, console, packages, base_dir: Path):
    """Builds descriptors against the live server URL and runs the orchestrator."""

    async def _go(base_url):
        descriptors = [
            PackageDescriptor(**{**p, "source": p["source"].format(base=base_url)})
            for p in packages
        ]
        async with ContentAPIClient(connect_timeout=2, read_timeout=5) as client:
            return await FetchOrchestrator(client, console).run(descriptors, base_dir)

    return server.run(_go)


def _lines(console) -> list[str]:
    return console.file.getvalue().splitlines()


def test_scenario_one_success_one_404(tmp_path, console, docs_server):
    server = docs_server({"/a": (200, b"alpha docs"), "/b": (404, b"missing")})
    packages = [
        {"name": "A", "source": "{base}/a", "tokens": "10", "output": "a/out.txt"},
        {"name": "B", "source": "{base}/b?x=1", "tokens": "20", "output": "b/out.txt"},
    ]

    stats = _run(server, console, packages, tmp_path)

    assert (tmp_path / "a" / "out.txt").read_bytes() == b"alpha docs"
    assert not (tmp_path / "b" / "out.txt").exists()
    assert server.requests == ["/a?tokens=10", "/b?x=1&tokens=20"]
    assert _lines(console) == [
        "Fetching documentation packages...",
        "  Fetching: A",
        "    -> a/out.txt",
        "  Fetching: B",
        "    FAILED: B",
        "Done.",
    ]
    assert (stats.succeeded, stats.failed, stats.skipped) == (1, 1, 0)
    assert stats.failed_packages == ["B"]
    assert stats.bytes_written == len(b"alpha docs")


def test_order_is_preserved_across_failures(tmp_path, console, docs_server):
    server = docs_server({"/one": (200, b"1"), "/three": (200, b"3")})
    packages = [
        {"name": name, "source": "{base}/" + name, "tokens": "1", "output": f"{name}.txt"}
        for name in ("one", "two", "three", "four")
    ]

    _run(server, console, packages, tmp_path)

    fetching = [line for line in _lines(console) if line.startswith("  Fetching:")]
    assert fetching == [
        "  Fetching: one",
        "  Fetching: two",
        "  Fetching: three",
        "  Fetching: four",
    ]


def test_unreachable_host_does_not_block_later_packages(tmp_path, console, docs_server):
    server = docs_server({"/first": (200, b"first"), "/third": (200, b"third")})
    packages = [
        {"name": "first", "source": "{base}/first", "tokens": "5", "output": "1.txt"},
        {
            "name": "second",
            "source": "http://127.0.0.1:1/unreachable",
            "tokens": "5",
            "output": "2.txt",
        },
        {"name": "third", "source": "{base}/third", "tokens": "5", "output": "3.txt"},
    ]

    stats = _run(server, console, packages, tmp_path)

    assert (tmp_path / "1.txt").read_bytes() == b"first"
    assert not (tmp_path / "2.txt").exists()
    assert (tmp_path / "3.txt").read_bytes() == b"third"
    assert "    FAILED: second" in _lines(console)
    assert _lines(console)[-1] == "Done."
    assert stats.failed == 1


def test_nested_output_directories_are_created(tmp_path, console, docs_server):
    server = docs_server({"/doc": (200, b"nested")})
    packages = [
        {"name": "N", "source": "{base}/doc", "tokens": "1", "output": "sub/dir/file.txt"}
    ]

    _run(server, console, packages, tmp_path)

    assert (tmp_path / "sub" / "dir" / "file.txt").read_bytes() == b"nested"


def test_refetch_overwrites_existing_file(tmp_path, console, docs_server):
    target = tmp_path / "doc.txt"
    target.write_bytes(b"a much longer stale document from last time")
    server = docs_server({"/doc": (200, b"fresh")})
    packages = [{"name": "D", "source": "{base}/doc", "tokens": "1", "output": "doc.txt"}]

    _run(server, console, packages, tmp_path)
    _run(server, console, packages, tmp_path)

    assert target.read_bytes() == b"fresh"
    assert server.requests == ["/doc?tokens=1", "/doc?tokens=1"]
    assert _lines(console).count("    -> doc.txt") == 2


def test_failed_fetch_keeps_previous_file(tmp_path, console, docs_server):
    target = tmp_path / "doc.txt"
    target.write_bytes(b"previous")
    server = docs_server({"/doc": (500, b"boom")})
    packages = [{"name": "D", "source": "{base}/doc", "tokens": "1", "output": "doc.txt"}]

    stats = _run(server, console, packages, tmp_path)

    assert target.read_bytes() == b"previous"
    assert stats.failed == 1


def test_redirects_are_followed(tmp_path, console, docs_server):
    server = docs_server({"/old": (302, b"redirect:/new"), "/new": (200, b"moved")})
    packages = [{"name": "R", "source": "{base}/old", "tokens": "9", "output": "r.txt"}]

    _run(server, console, packages, tmp_path)

    assert (tmp_path / "r.txt").read_bytes() == b"moved"
    assert server.requests[0] == "/old?tokens=9"


def test_incomplete_package_is_skipped(tmp_path, console, docs_server):
    server = docs_server({"/ok": (200, b"ok")})
    packages = [
        {"name": "broken", "source": "{base}/ok", "tokens": "", "output": "x.txt"},
        {"name": "fine", "source": "{base}/ok", "tokens": "1", "output": "ok.txt"},
    ]

    stats = _run(server, console, packages, tmp_path)

    assert not (tmp_path / "x.txt").exists()
    assert (tmp_path / "ok.txt").exists()
    assert (stats.succeeded, stats.failed, stats.skipped) == (1, 0, 1)
    assert server.requests == ["/ok?tokens=1"]


def test_output_escaping_base_dir_fails_without_writing(tmp_path, console, docs_server):
    base_dir = tmp_path / "base"
    base_dir.mkdir()
    server = docs_server({"/doc": (200, b"x")})
    packages = [
        {"name": "evil", "source": "{base}/doc", "tokens": "1", "output": "../escape.txt"},
        {"name": "good", "source": "{base}/doc", "tokens": "1", "output": "good.txt"},
    ]

    stats = _run(server, console, packages, base_dir)

    assert not (tmp_path / "escape.txt").exists()
    assert (base_dir / "good.txt").exists()
    assert "    FAILED: evil" in _lines(console)
    assert server.requests == ["/doc?tokens=1"]
    assert stats.failed == 1


def test_directory_creation_failure_is_per_package(tmp_path, console, docs_server):
    (tmp_path / "blocker").write_text("a file where a directory should be")
    server = docs_server({"/doc": (200, b"x")})
    packages = [
        {"name": "blocked", "source": "{base}/doc", "tokens": "1", "output": "blocker/f.txt"},
        {"name": "free", "source": "{base}/doc", "tokens": "1", "output": "free/f.txt"},
    ]

    stats = _run(server, console, packages, tmp_path)

    assert "    FAILED: blocked" in _lines(console)
    assert (tmp_path / "free" / "f.txt").exists()
    assert (stats.succeeded, stats.failed) == (1, 1)


def test_names_with_markup_are_printed_literally(tmp_path, console, docs_server):
    server = docs_server({})
    packages = [
        {"name": "[bold]lib[/bold]", "source": "{base}/gone", "tokens": "1", "output": "l.txt"}
    ]

    _run(server, console, packages, tmp_path)

    assert "    FAILED: [bold]lib[/bold]" in _lines(console)


def test_emoji_codes_are_printed_literally(tmp_path, console, docs_server):
    server = docs_server({"/ok": (200, b"ok")})
    packages = [
        {"name": "lib:smile:", "source": "{base}/gone", "tokens": "1", "output": "l.txt"},
        {"name": "ok", "source": "{base}/ok", "tokens": "1", "output": "docs:fire:.txt"},
    ]

    _run(server, console, packages, tmp_path)

    assert _lines(console) == [
        "Fetching documentation packages...",
        "  Fetching: lib:smile:",
        "    FAILED: lib:smile:",
        "  Fetching: ok",
        "    -> docs:fire:.txt",
        "Done.",
    ]
