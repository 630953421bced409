# File: tests/test_cli.py
import pytest

from page_flattener.main import main, parse_arguments


def test_parse_arguments_defaults():
    args = parse_arguments(["--url", "example.org"])
    assert args.url == "example.org"
    assert args.output is None
    assert args.no_annotate is False


def test_url_is_required():
    with pytest.raises(SystemExit):
        parse_arguments([])


@pytest.mark.asyncio
async def test_writes_flattened_page_to_file(site_server, tmp_path):
    out = tmp_path / "page.html"

    code = await main(["--url", site_server, "-o", str(out), "-q", "--no-annotate"])

    assert code == 0
    html = out.read_text(encoding="utf-8")
    assert "console.log('hi');" in html
    assert "h1 { color: red; }" in html


@pytest.mark.asyncio
async def test_writes_into_directory(site_server, tmp_path):
    code = await main(["--url", site_server, "-o", str(tmp_path), "-q"])

    assert code == 0
    written = list(tmp_path.iterdir())
    assert len(written) == 1
    assert written[0].name.endswith("_index.html")
    assert "/* Inlined from" in written[0].read_text(encoding="utf-8")


@pytest.mark.asyncio
async def test_writes_to_stdout(site_server, capsys):
    code = await main(["--url", site_server, "-q", "--no-annotate"])

    assert code == 0
    assert "console.log('hi');" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_missing_page_exits_with_error(site_server, capsys):
    code = await main(["--url", site_server + "/gone", "-q"])

    assert code == 1
    assert capsys.readouterr().out == ""


@pytest.mark.asyncio
async def test_invalid_concurrency_exits_with_error(site_server):
    code = await main(["--url", site_server, "-q", "--concurrency", "0"])
    assert code == 1
