"""Detection and termination of a running application.

A process belongs to an application when its executable lives inside
the application bundle. Removing a running application is refused by
the CLI, since the app would write its caches and preferences back.
"""

import logging
import os

import psutil

from appscrub.models.identity import ApplicationIdentity

logger = logging.getLogger(__name__)

DEFAULT_QUIT_TIMEOUT = 5.0


def find_processes(identity: ApplicationIdentity) -> list[psutil.Process]:
    """List the processes running from an application bundle.

    Processes that vanish or cannot be inspected while iterating are
    ignored.

    Args:
        identity: Application to look for.

    Returns:
        Matching processes, in pid order.
    """
    bundle = os.path.normpath(identity.install_path) + os.sep
    found: list[psutil.Process] = []
    for proc in psutil.process_iter(["pid", "name", "exe"]):
        exe = proc.info.get("exe")
        if exe and exe.startswith(bundle):
            found.append(proc)
    found.sort(key=lambda p: p.pid)
    if found:
        logger.debug(
            "%s is running: %s",
            identity.display_name,
            ", ".join(f"{p.info.get('name')} ({p.pid})" for p in found),
        )
    return found


def is_running(identity: ApplicationIdentity) -> bool:
    return bool(find_processes(identity))


def terminate(
    identity: ApplicationIdentity,
    *,
    force: bool = False,
    timeout: float = DEFAULT_QUIT_TIMEOUT,
) -> bool:
    """Ask an application's processes to quit and wait for them.

    Args:
        identity: Application to quit.
        force: Send SIGKILL instead of SIGTERM.
        timeout: Seconds to wait for the processes to exit.

    Returns:
        True if no process of the application is left running.
    """
    processes = find_processes(identity)
    if not processes:
        return True

    for proc in processes:
        try:
            if force:
                proc.kill()
            else:
                proc.terminate()
        except psutil.NoSuchProcess:
            continue
        except psutil.AccessDenied as e:
            logger.warning("Cannot signal %s (pid %d): %s", identity.display_name, proc.pid, e)

    _, alive = psutil.wait_procs(processes, timeout=timeout)
    if alive:
        logger.warning(
            "%s still running after %.1fs: pids %s",
            identity.display_name,
            timeout,
            ", ".join(str(p.pid) for p in alive),
        )
        return False

    logger.info("Quit %s (%d process(es))", identity.display_name, len(processes))
    return True
