"""General package utilities."""

import pathlib


def get_data_folder() -> pathlib.Path:
    """
    Get a path to the folder containing the example worlds.

    :return: Path to data folder.
    """
    return pathlib.Path(__file__).parent.parent / "data"


def replace_special_yaml_tokens(
    in_text: str | pathlib.Path,
    root_dir: pathlib.Path | str | None = None,
) -> pathlib.Path:
    """
    Replaces special tokens permitted in world file paths.

    Supported tokens are ``$HOME``, ``$DATA`` (the bundled data folder),
    and ``$PWD`` (the root directory).

    :param in_text: Input path, possibly containing tokens.
    :param root_dir: Root directory for basing some tokens, uses the current directory if not specified.
    :return: Path with all special tokens substituted.
    """
    root_dir = pathlib.Path(root_dir) if root_dir is not None else pathlib.Path.cwd()
    if isinstance(in_text, pathlib.Path):
        in_text = in_text.as_posix()
    elif not isinstance(in_text, str):
        raise TypeError(f"Could not replace text for input type: {type(in_text)}.")

    text = in_text.replace("$HOME", pathlib.Path.home().as_posix())
    text = text.replace("$DATA", get_data_folder().as_posix())
    text = text.replace("$PWD", root_dir.as_posix())
    return pathlib.Path(text)
