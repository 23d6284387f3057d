import os
import re
import warnings
from functools import partial

from pydantic import AfterValidator

BAD_NODE_RE = re.compile(r"^(?:|\.+|__.*)$")
"""Regular expression matching invalid Zarr node names.

- must not be the empty string ("")
- must not be a string composed only of period characters, e.g. "." or ".."
- must not start with the reserved prefix "__"
"""

DEFAULT_IGNORED_SUBFOLDERS = frozenset({"OME"})


def validate_node_name(path: str, field_name: str = "") -> str:
    """Raise on invalid Zarr node names and warn on risky ones.

    `path` may name a nested node using "/" separators, each part is checked on
    its own.  "risky" parts contain characters outside of [A-Za-z0-9._-], which
    may cause issues on some filesystems or when used in URLs.

    Set DROPZARR_ALLOW_RISKY_NODE_NAMES=1 to opt out of the warning.
    """
    for part in path.split("/"):
        if BAD_NODE_RE.match(part):
            raise ValueError(
                f"The name {path!r} is not a valid Zarr node name. See "
                "https://zarr-specs.readthedocs.io/en/latest/v3/core/index.html#node-names"
            )

        risky_chars = re.findall(r"[^A-Za-z0-9._-]", part)
        if risky_chars and not os.getenv("DROPZARR_ALLOW_RISKY_NODE_NAMES"):
            for_field = f" on field '{field_name}'" if field_name else ""
            warnings.warn(
                f"The name {part!r}{for_field} contains potentially risky characters "
                f"when used as a zarr node: {set(risky_chars)}.\n"
                "Set DROPZARR_ALLOW_RISKY_NODE_NAMES=1 to suppress this warning.",
                UserWarning,
                stacklevel=3,
            )
    return path


SuggestDatasetPath = AfterValidator(
    partial(validate_node_name, field_name="Dataset.path")
)


def ignored_subfolders() -> frozenset[str]:
    """Folder names that never count as an image folder below a Zarr root.

    "OME" (the bioformats2raw/OME-XML sidecar group) is always ignored; extra
    names may be added as a comma-separated list in DROPZARR_IGNORED_SUBFOLDERS.
    """
    extra = os.getenv("DROPZARR_IGNORED_SUBFOLDERS", "")
    names = {name.strip() for name in extra.split(",") if name.strip()}
    return DEFAULT_IGNORED_SUBFOLDERS | names
