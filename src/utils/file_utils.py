from pathlib import Path


def add_suffix_to_top_level(rel_path: Path, suffix: str) -> Path:
    """
    Add a suffix to the top-level directory name of a relative path.

    Example:
        'corpus/subdir/file1.txt'
        + '_compressed'
        -> 'corpus_compressed/subdir/file1.txt'
    """
    parts = list(rel_path.parts)
    if not parts:
        return Path()
    parts[0] = parts[0] + suffix
    return Path(*parts)


def suffix_filename(path: Path, suffix: str) -> Path:
    """
    Add a suffix before the file extension.

    Example:
        file1.txt + '_decoded' -> file1_decoded.txt
        README    + '_decoded' -> README_decoded
    """
    if path.suffix:
        return path.with_name(path.stem + suffix + path.suffix)
    return path.with_name(path.name + suffix)


def compressed_path(path: Path, ext: str) -> Path:
    """file1.txt + '.hf' -> file1.txt.hf"""
    return path.with_name(path.name + ext)


def restored_path(path: Path, ext: str, suffix: str) -> Path:
    """
    Pick an output name for decompressing `path`.

    Example:
        file1.txt.hf -> file1_decoded.txt
        blob.bin     -> blob_decoded.bin (no compressed extension to strip)
    """
    name = path.name
    if ext and name.endswith(ext) and len(name) > len(ext):
        name = name[: -len(ext)]
    return suffix_filename(path.with_name(name), suffix)
