#!/usr/bin/env python3

"""Install the pytextutils scripts from src/ into a bin directory."""

import argparse
import logging
import shutil
import subprocess
import sys
from pathlib import Path

logger = logging.getLogger(__name__)

SHEBANG = "#!/usr/bin/env python3"

# Imported by the tools; installed next to them with their .py suffix.
SUPPORT_MODULES = ["pystream"]


class ColorFormatter(logging.Formatter):
    """Prefix each record with the ANSI color of its level."""

    COLORS = {
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[41m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelno, "")
        message = super().format(record)
        return f"{color}{message}{self.RESET}" if color else message


def has_shebang(file_path):
    """Check if the file starts with the python3 shebang."""
    with open(file_path) as f:
        return f.readline().strip() == SHEBANG


def compiles(file_path):
    """Check if the Python file has valid syntax."""
    result = subprocess.run(
        [sys.executable, "-m", "py_compile", str(file_path)],
        capture_output=True,
    )
    return result.returncode == 0


def confirm_overwrite(target_path, dry_run):
    """Ask before replacing an existing file; always proceeds on dry runs."""
    if not target_path.exists():
        return True
    logger.warning(f"{target_path} already exists.")
    if dry_run:
        return True
    return input("  Overwrite? (Y/n): ").strip().lower() != "n"


def copy_file(source, target_path, dry_run, executable):
    if dry_run:
        logger.info(f"Would install {source.name} to {target_path} (dry-run)")
        return
    shutil.copy2(source, target_path)
    if executable:
        target_path.chmod(0o755)
    logger.info(f"Installed {source.name} to {target_path}")


def install(src_dir, install_dir, dry_run):
    """
    Install every tool script and the support modules they import.

    Tool scripts are installed without their .py suffix; support modules keep
    it so the tools can import them from the same directory.

    Returns:
        bool:
            True if every support module and at least one tool was installed.

    """
    if not dry_run:
        install_dir.mkdir(parents=True, exist_ok=True)

    for module in SUPPORT_MODULES:
        module_path = src_dir / f"{module}.py"
        if not module_path.exists() or not compiles(module_path):
            logger.error(f"Support module {module_path} is missing or invalid.")
            return False
        target_path = install_dir / module_path.name
        if confirm_overwrite(target_path, dry_run):
            copy_file(module_path, target_path, dry_run, executable=False)

    installed = 0
    tools = [p for p in sorted(src_dir.glob("*.py")) if p.stem not in SUPPORT_MODULES]
    for script_path in tools:
        if not has_shebang(script_path):
            logger.warning(f"Skipped: {script_path} has no '{SHEBANG}' shebang.")
            continue
        if not compiles(script_path):
            logger.warning(f"Skipped: {script_path} has syntax errors.")
            continue
        target_path = install_dir / script_path.stem
        if not confirm_overwrite(target_path, dry_run):
            logger.info(f"Skipped: {script_path.stem} not overwritten.")
            continue
        copy_file(script_path, target_path, dry_run, executable=True)
        installed += 1

    logger.info(f"{installed} of {len(tools)} tools processed.")
    if not dry_run:
        logger.info(f"Make sure {install_dir} is in your PATH.")
    return installed > 0


def main():
    """Parse arguments and install the tools."""
    handler = logging.StreamHandler()
    handler.setFormatter(ColorFormatter())
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)

    parser = argparse.ArgumentParser(
        description="Install the pytextutils scripts from src/ to a bin directory."
    )
    parser.add_argument(
        "--install-dir",
        default=str(Path.home() / ".local" / "bin"),
        help="Directory to install to (default: ~/.local/bin)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be installed without installing",
    )
    args = parser.parse_args()

    src_dir = Path(__file__).parent / "src"
    if not src_dir.exists():
        logger.error(f"{src_dir} does not exist.")
        sys.exit(1)
    sys.exit(0 if install(src_dir, Path(args.install_dir), args.dry_run) else 1)


if __name__ == "__main__":
    main()
