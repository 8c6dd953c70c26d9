from pathlib import Path

import firstboot


def get_top_level_dir() -> Path:
    """Return the absolute path to the top firstboot project directory

    @return Path('<top-firstboot-dir>')
    """
    return Path(firstboot.__file__).parent.parent.resolve()


def firstboot_project_dir(sub_path: str) -> str:
    """Get a path within the firstboot project directory

    @return str of the combined path

    Example: firstboot_project_dir("my/path") -> "/path/to/firstboot/my/path"
    """
    return str(get_top_level_dir() / sub_path)
