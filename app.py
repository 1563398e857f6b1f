import asyncio
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from core.logging_utils import ActionRecorder
from storehouse import (
    CloseConnectionsError,
    HealthCheckResult,
    MapManager,
    Storehouse,
    StorehouseError,
)
from storehouse.managers import PostgresManager
from storehouse.utilities import Config

logger = logging.getLogger(__name__)


# ============================================================================
# SETUP
# ============================================================================

def build_storehouse() -> Storehouse:
    """Storehouse with every bundled manager type registered"""
    storehouse = Storehouse()
    storehouse.set_manager_type(MapManager)
    if PostgresManager is not None:
        storehouse.set_manager_type(PostgresManager)
    return storehouse


# ============================================================================
# HEALTH REPORT
# ============================================================================

def print_health_report(manager_names: List[str],
                        results: Dict[str, HealthCheckResult],
                        recorder: Optional[ActionRecorder] = None) -> bool:
    """
    Print one line per manager.

    Returns:
        True if every manager that supports health checks is healthy
    """
    print("=" * 70)
    print("🩺 HEALTH REPORT")
    print("=" * 70)

    all_healthy = True
    for name in manager_names:
        result = results.get(name)
        if result is None:
            print(f"–  {name}: no health check available")
            continue

        icon = "✓" if result.healthy else "✗"
        line = f"{icon}  {name}: {result.message or ('healthy' if result.healthy else 'unhealthy')}"
        if result.latency is not None:
            line += f" ({result.latency:.1f} ms)"
        print(line)

        if recorder:
            recorder.record_action(
                "HEALTH",
                f"Manager '{name}' is {'healthy' if result.healthy else 'unhealthy'}",
                result.to_dict(),
                level="INFO" if result.healthy else "WARNING"
            )
        all_healthy = all_healthy and result.healthy

    print("=" * 70)
    return all_healthy


async def run_health_report(storehouse: Storehouse, config: Config,
                            recorder: Optional[ActionRecorder] = None) -> int:
    """
    Register the configured manager, report its health, then destroy the
    storehouse.

    Returns:
        Process exit code
    """
    try:
        storehouse.add(config.get_manager_settings())
        results = await storehouse.health_check_all()
        return 0 if print_health_report(storehouse.manager_names, results, recorder) else 1
    finally:
        try:
            count = await storehouse.destroy()
            logger.info(f"Storehouse destroyed ({count} manager(s) closed)")
        except CloseConnectionsError as shutdown_error:
            logger.error(f"Error shutting down storehouse: {shutdown_error}")


# ============================================================================
# MAIN APPLICATION
# ============================================================================

def main(config: Optional[Config] = None, log_dir: Optional[Path] = None) -> int:
    """Main application entry point"""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(name)s - %(message)s'
    )

    recorder = ActionRecorder(log_dir)
    log_file = recorder.start_recording()
    print(f"📝 Action recording started: {log_file}\n")

    storehouse = None
    try:
        config = config or Config()
        storehouse = build_storehouse()
        recorder.attach(storehouse)
        recorder.record_action("SYSTEM", "Health report started", {
            "manager": config.MANAGER_NAME,
            "type": config.MANAGER_TYPE,
            "host": config.DB_HOST,
            "database": config.DB_NAME
        })

        return asyncio.run(run_health_report(storehouse, config, recorder))

    except KeyboardInterrupt:
        print("\n\nInterrupted by user. Exiting...")
        recorder.record_action("SYSTEM", "Interrupted by user", level="WARNING")
        return 130

    except ValueError as e:
        print(f"\n✗ Invalid configuration: {e}")
        recorder.record_action("ERROR", f"Invalid configuration: {e}", level="ERROR")
        return 1

    except StorehouseError as e:
        print(f"\n✗ Error: {e}")
        recorder.record_action("ERROR", str(e), {"error_type": type(e).__name__}, level="ERROR")
        return 1

    finally:
        if storehouse is not None:
            recorder.detach(storehouse)
        recorder.stop_recording()
        print(f"\n📝 Action recording stopped. Log saved to: {log_file}")


if __name__ == "__main__":
    sys.exit(main())
