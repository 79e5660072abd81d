import pytest

from mq_bridge.detection import detect_input_format
from mq_bridge.options import InputFormat


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("README.md", InputFormat.MARKDOWN),
        ("notes.Markdown", InputFormat.MARKDOWN),
        ("page.mdx", InputFormat.MDX),
        ("index.HTML", InputFormat.HTML),
        ("index.htm", InputFormat.HTML),
        ("log.txt", InputFormat.TEXT),
    ],
)
def test_detect_input_format(name: str, expected: InputFormat) -> None:
    assert detect_input_format(name) is expected


def test_unknown_extension_is_raw(tmp_path) -> None:
    assert detect_input_format(tmp_path / "data.csv") is InputFormat.RAW
    assert detect_input_format("Makefile") is InputFormat.RAW
