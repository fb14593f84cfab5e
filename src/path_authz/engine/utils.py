from path_authz.spec.section import ROOT_PATH


def path_segments(path: str) -> list[str]:
    """Split a path into non-empty segments."""
    return [s for s in path.strip("/").split("/") if s]


def normalize_path(path: str) -> str:
    """Absolute, slash-separated, no trailing slash except for the root."""
    return ROOT_PATH + "/".join(path_segments(path))


def parent_path(path: str) -> str:
    """Strip the last component; the root is its own parent."""
    segments = path_segments(path)
    return ROOT_PATH + "/".join(segments[:-1])
