# ==============================================================================
# Author : Yuxuan Zhang (robotics@z-yx.cc)
# License: MIT
# ==============================================================================
from .arguments import register_arguments, Argument

register_arguments(
    prefix=Argument(
        type=str,
        required=False,
        help="Path prefix for the trajectory and snapshot files. "
        "Nothing is written if not specified.",
    ),
    overwrite=Argument(
        "-f",
        opt_name="force",
        action="store_true",
        help="Overwrite existing files",
    ),
)

# ==============================================================================
# End argument injection
# ==============================================================================
from pathlib import Path
from dataclasses import dataclass, field
from .util import ownAttributes


@ownAttributes
@dataclass(frozen=False)
class Output:
    debug: bool = False

    prefix: str | None = None
    overwrite: bool = False

    directory: Path | None = field(init=False)
    stem: str | None = field(init=False)

    def __post_init__(self):
        if self.prefix is None:
            self.directory = self.stem = None
            return
        if self.prefix.endswith("/"):
            self.directory, self.stem = Path(self.prefix), ""
        else:
            self.directory, self.stem = Path(self.prefix).parent, Path(self.prefix).name
        if self.directory.is_file():
            raise FileExistsError(f"Prefix {self.directory} is a file")
        self.directory.mkdir(parents=True, exist_ok=True)

    @property
    def enabled(self):
        return self.directory is not None

    def __call__(self, name: str | None = None, suffix: str | None = None):
        """
        Path of an output artefact, or None when output is disabled.
        Refuses to clobber an existing file unless overwrite is set.
        """
        if not self.enabled:
            return None
        name = "-".join(filter(None, (self.stem, name))) or self.directory.name
        if suffix:
            if suffix.startswith("."):
                raise ValueError("suffix should not start with '.'")
            name = f"{name}.{suffix}"
        path = self.directory / name
        if path.exists():
            if not self.overwrite:
                raise FileExistsError(path)
            path.unlink()
        return path
