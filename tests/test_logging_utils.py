"""Action recorder and registry event recording."""

import pytest

from core.logging_utils import ActionRecorder
from helpers import FailingCloseManager, SimpleManager
from storehouse import CloseConnectionsError, RegistryEvent


@pytest.fixture
def recorder(tmp_path):
    recorder = ActionRecorder(log_dir=tmp_path / "logs")
    yield recorder
    recorder.stop_recording()


def test_start_recording_writes_header(recorder, tmp_path):
    log_file = recorder.start_recording("actions.txt")

    assert log_file == tmp_path / "logs" / "actions.txt"
    content = log_file.read_text(encoding='utf-8')
    assert "ACTION LOG - Started" in content
    assert "[SYSTEM] Recording started" in content
    assert recorder.is_recording_enabled()


def test_default_filename(recorder):
    log_file = recorder.start_recording()
    assert log_file.name.startswith("action_log_")
    assert log_file.suffix == ".txt"


def test_nothing_recorded_before_start(recorder):
    recorder.record_action("SYSTEM", "ignored")
    assert recorder.log_file is None
    assert not recorder.is_recording_enabled()


def test_record_action_with_details(recorder):
    log_file = recorder.start_recording("actions.txt")
    recorder.record_action("HEALTH", "Manager 'main' is unhealthy", {"latency": 5}, level="WARNING")

    content = log_file.read_text(encoding='utf-8')
    assert "[WARNING] [HEALTH] Manager 'main' is unhealthy" in content
    assert '"latency": 5' in content


def test_stop_recording(recorder):
    log_file = recorder.start_recording("actions.txt")
    recorder.stop_recording()
    recorder.record_action("SYSTEM", "after stop")

    content = log_file.read_text(encoding='utf-8')
    assert "Recording stopped" in content
    assert "after stop" not in content


@pytest.mark.asyncio
async def test_attach_records_registry_events(recorder, registry):
    log_file = recorder.start_recording("actions.txt")
    recorder.attach(registry)

    registry.add_manager('main', SimpleManager('main'))
    registry.add_manager('bad', FailingCloseManager('bad'))
    with pytest.raises(CloseConnectionsError):
        await registry.destroy()

    content = log_file.read_text(encoding='utf-8')
    assert "[INFO] [REGISTRY] manager:added" in content
    assert '"name": "main"' in content
    assert "[ERROR] [REGISTRY] connection:error:close" in content
    assert "[INFO] [REGISTRY] registry:destroyed" in content


def test_detach_removes_listeners(recorder, registry):
    recorder.attach(registry)
    recorder.attach(registry)
    assert registry.listener_count(RegistryEvent.MANAGER_ADDED) == 1

    recorder.detach(registry)

    for event in RegistryEvent:
        assert registry.listener_count(event) == 0
