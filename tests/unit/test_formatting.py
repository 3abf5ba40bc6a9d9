import pytest

from folio.shared.formatting import format_size


@pytest.mark.parametrize(
    "size, expected",
    [
        (0, "-"),
        (None, "-"),
        (1, "1 B"),
        (1023, "1023 B"),
        (1024, "1.0 KB"),
        (1536, "1.5 KB"),
        (2_097_152, "2.0 MB"),
        (3 * 1024**3, "3.0 GB"),
    ],
)
def test_format_size(size, expected):
    assert format_size(size) == expected
