"""Tests for laundrify coordinator."""
from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from homeassistant.helpers.update_coordinator import UpdateFailed

from custom_components.laundrify.api.exceptions import (
    LaundrifyAuthError,
    LaundrifyRequestError,
    LaundrifyApiError,
)
from custom_components.laundrify.api.models import LaundrifyMachine, MachineStatus
from custom_components.laundrify.coordinator import LaundrifyCoordinator


def make_machine(machine_id: str, status: str = "OFF") -> LaundrifyMachine:
    """Create a machine."""
    return LaundrifyMachine.from_dict({"_id": machine_id, "name": f"M{machine_id}", "status": status})


@pytest.fixture
def mock_client():
    """Create a mock client."""
    client = MagicMock()
    client.async_get_machines = AsyncMock(return_value=[])
    client.async_get_machine = AsyncMock()
    return client


@pytest.fixture(autouse=True)
def device_registry():
    """Patch the device registry used for removing obsolete machines."""
    with patch("custom_components.laundrify.coordinator.dr") as mock_dr:
        mock_dr.async_entries_for_config_entry.return_value = []
        yield mock_dr


@pytest.fixture
def coordinator(hass, mock_client, config_entry):
    """Create a coordinator instance."""
    return LaundrifyCoordinator(
        hass=hass,
        client=mock_client,
        config_entry=config_entry,
        scan_interval=15,
    )


class TestLaundrifyCoordinator:
    """Tests for LaundrifyCoordinator."""

    def test_update_interval(self, coordinator):
        """Test the polling interval comes from the config."""
        assert coordinator.update_interval == timedelta(seconds=15)

    @pytest.mark.asyncio
    async def test_first_update_discovers_machines(self, coordinator, mock_client):
        """Test the first update lists the machines."""
        mock_client.async_get_machines.return_value = [
            make_machine("42", "ON"),
            make_machine("43"),
        ]

        data = await coordinator._async_update_data()

        assert set(data) == {"42", "43"}
        assert coordinator.machine_ids == ["42", "43"]
        mock_client.async_get_machine.assert_not_called()

    @pytest.mark.asyncio
    async def test_discovery_error(self, coordinator, mock_client):
        """Test discovery failures are update failures."""
        mock_client.async_get_machines.side_effect = LaundrifyApiError("boom")

        with pytest.raises(UpdateFailed):
            await coordinator._async_update_data()

    @pytest.mark.asyncio
    async def test_polls_each_machine(self, coordinator, mock_client):
        """Test later updates poll every known machine."""
        mock_client.async_get_machines.return_value = [make_machine("42"), make_machine("43")]
        await coordinator._async_update_data()
        mock_client.async_get_machine.side_effect = lambda machine_id: make_machine(machine_id, "ON")

        data = await coordinator._async_update_data()

        assert data["42"].status == MachineStatus.ON
        assert data["43"].status == MachineStatus.ON
        assert mock_client.async_get_machine.await_count == 2

    @pytest.mark.asyncio
    async def test_failed_machine_is_left_out(self, coordinator, mock_client):
        """Test one failing machine does not fail the others."""
        mock_client.async_get_machines.return_value = [make_machine("42"), make_machine("43")]
        await coordinator._async_update_data()

        async def get_machine(machine_id):
            if machine_id == "43":
                raise LaundrifyRequestError("down", last_error=LaundrifyApiError("x", 503))
            return make_machine(machine_id, "ON")

        mock_client.async_get_machine.side_effect = get_machine

        data = await coordinator._async_update_data()

        assert set(data) == {"42"}
        coordinator.data = data
        assert coordinator.get_machine("43") is None

    @pytest.mark.asyncio
    async def test_all_machines_unauthorized(self, coordinator, mock_client):
        """Test a rejected token fails the update."""
        mock_client.async_get_machines.return_value = [make_machine("42")]
        await coordinator._async_update_data()
        mock_client.async_get_machine.side_effect = LaundrifyAuthError()

        with pytest.raises(UpdateFailed, match="Authentication failed"):
            await coordinator._async_update_data()

    def test_get_machine_without_data(self, coordinator):
        """Test lookups before the first refresh."""
        assert coordinator.get_machine("42") is None

    @pytest.mark.asyncio
    async def test_discovery_removes_obsolete_devices(
        self, coordinator, mock_client, device_registry, config_entry
    ):
        """Test devices of machines no longer on the account are removed."""
        kept = MagicMock(id="device-42", identifiers={("laundrify", "42")})
        obsolete = MagicMock(id="device-99", identifiers={("laundrify", "99")})
        device_registry.async_entries_for_config_entry.return_value = [kept, obsolete]
        mock_client.async_get_machines.return_value = [make_machine("42")]

        await coordinator._async_update_data()

        registry = device_registry.async_get.return_value
        registry.async_update_device.assert_called_once_with(
            "device-99", remove_config_entry_id=config_entry.entry_id
        )

    @pytest.mark.asyncio
    async def test_empty_account_is_not_rediscovered(self, coordinator, mock_client):
        """Test discovery runs only on the first refresh."""
        assert await coordinator._async_update_data() == {}

        mock_client.async_get_machines.return_value = [make_machine("42")]
        assert await coordinator._async_update_data() == {}

        mock_client.async_get_machines.assert_awaited_once()
        mock_client.async_get_machine.assert_not_called()
