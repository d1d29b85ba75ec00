import json
import shutil
import subprocess

from cmake_wrapping.utils.logging import make_logger

logger = make_logger(__name__)


def check_tool_exists(tool_name: str) -> bool:
    """Check if a command-line tool exists."""
    exists = shutil.which(tool_name) is not None
    if exists:
        logger.debug(f"Tool '{tool_name}' is available")
    else:
        logger.debug(f"Tool '{tool_name}' not found in PATH")
    return exists


def run_command(
    cmd: list[str],
    check: bool = True,
    capture_output: bool = False,
    env: dict[str, str] | None = None,
) -> subprocess.CompletedProcess[str]:
    """Run a command and return the result."""
    logger.info(f"Running command: {json.dumps(cmd)}")

    try:
        result = subprocess.run(
            cmd, check=check, capture_output=capture_output, text=True, env=env
        )
    except subprocess.CalledProcessError as e:
        logger.error(f"Command failed with return code: {e.returncode}")
        if e.stderr:
            logger.error(f"Command stderr: {e.stderr}")
        raise
    except FileNotFoundError:
        logger.error(f"Command not found: {cmd[0]}")
        raise

    if capture_output and result.stderr:
        logger.debug(f"Command stderr: {result.stderr}")
    logger.info(f"Command completed with return code: {result.returncode}")
    return result
