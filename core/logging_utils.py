"""
Logging utilities - Action recorder
Writes human-readable, timestamped action entries to a log file and can
follow a registry's lifecycle events.
"""

import json
import logging
import threading
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple

from storehouse.events import RegistryEvent

logger = logging.getLogger(__name__)


class ActionRecorder:
    """
    Records actions instantly to a log file.
    Thread-safe. Create one per application; nothing is shared globally.
    """

    def __init__(self, log_dir: Optional[Path] = None):
        """
        Args:
            log_dir: Directory for log files (default: ./logs)
        """
        self.enabled = False
        self.log_file: Optional[Path] = None
        self.log_dir = Path(log_dir) if log_dir is not None else Path("logs")
        self.file_lock = threading.Lock()
        self._attached: Dict[int, Tuple[Any, Dict[RegistryEvent, Callable[..., None]]]] = {}

    def start_recording(self, log_filename: Optional[str] = None) -> Path:
        """
        Start recording actions to a log file.

        Args:
            log_filename: Optional custom log filename

        Returns:
            Path to log file
        """
        if not log_filename:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            log_filename = f"action_log_{timestamp}.txt"

        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.log_file = self.log_dir / log_filename

        # Write header
        with open(self.log_file, 'w', encoding='utf-8') as f:
            f.write("=" * 80 + "\n")
            f.write(f"ACTION LOG - Started: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")
            f.write("=" * 80 + "\n\n")

        self.enabled = True
        self.record_action("SYSTEM", "Recording started", {"log_file": str(self.log_file)})
        return self.log_file

    def stop_recording(self):
        """Stop recording actions"""
        if self.enabled and self.log_file:
            self.record_action("SYSTEM", "Recording stopped", {})
            self.enabled = False

    def is_recording_enabled(self) -> bool:
        return self.enabled and self.log_file is not None

    def record_action(self, action_type: str, description: str,
                      details: Optional[Dict[str, Any]] = None, level: str = "INFO"):
        """
        Record an action instantly.

        Args:
            action_type: Type of action (SYSTEM, REGISTRY, HEALTH, ERROR, etc.)
            description: Brief description of the action
            details: Dictionary with additional details
            level: Log level (INFO, WARNING, ERROR, DEBUG)
        """
        if not self.is_recording_enabled():
            return

        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]

        log_line = f"[{timestamp}] [{level}] [{action_type}] {description}"
        if details:
            details_str = json.dumps(details, indent=2, default=str)
            log_line += f"\n  Details: {details_str}"
        log_line += "\n" + "-" * 80 + "\n"

        with self.file_lock:
            try:
                with open(self.log_file, 'a', encoding='utf-8') as f:
                    f.write(log_line)
                    f.flush()
            except OSError as e:
                logger.warning(f"Failed to write action log {self.log_file}: {e}")

    def attach(self, registry) -> 'ActionRecorder':
        """Record every RegistryEvent emitted by registry as a REGISTRY action"""
        if id(registry) in self._attached:
            return self

        listeners = {}
        for event in RegistryEvent:
            listener = self._event_listener(event)
            registry.on(event, listener)
            listeners[event] = listener
        self._attached[id(registry)] = (registry, listeners)
        return self

    def detach(self, registry) -> 'ActionRecorder':
        entry = self._attached.pop(id(registry), None)
        if entry is not None:
            for event, listener in entry[1].items():
                registry.off(event, listener)
        return self

    def _event_listener(self, event: RegistryEvent) -> Callable[..., None]:
        level = "ERROR" if event is RegistryEvent.CONNECTION_ERROR_CLOSE else "INFO"

        def listener(payload: Optional[Dict[str, Any]] = None):
            self.record_action("REGISTRY", event.value, payload, level=level)

        return listener
