"""Line-to-row normalization."""

from svloader.types import Row

QUOTE = '"'


def normalize_line(
    line: str,
    delimiter: str,
    enforce_double_quotes: bool,
    wrap: bool = True,
) -> Row:
    """Split one decoded line into its fields.

    With enforce_double_quotes every '"' is removed from the line before the
    split, and every resulting field is then wrapped in '"'. The wrapping
    runs after the split, so the added quotes are never stripped.

    The delimiter is matched literally. Empty fields, trailing ones included,
    are kept: "a,," gives ["a", "", ""]. There is no escaping, trimming or
    type inference.

    wrap=False skips the wrapping step (values bound as parameters are
    quoted by the driver).
    """
    if enforce_double_quotes:
        line = line.replace(QUOTE, "")

    fields = line.split(delimiter)

    if enforce_double_quotes and wrap:
        fields = [f"{QUOTE}{field}{QUOTE}" for field in fields]
    return fields
