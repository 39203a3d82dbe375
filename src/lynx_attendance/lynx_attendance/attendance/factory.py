from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import CheckInChannel
from .strategies.administrative_strategy import AdministrativeStrategy
from .strategies.base import EntryStrategy
from .strategies.qr_scan_strategy import QrScanStrategy
from .strategies.self_service_strategy import SelfServiceStrategy


@dataclass
class EntryStrategyFactory:
    """Factory Pattern: choose the status strategy for a check-in channel."""

    def for_channel(self, channel: CheckInChannel) -> EntryStrategy:
        if channel == CheckInChannel.SELF_SERVICE:
            return SelfServiceStrategy()
        if channel == CheckInChannel.QR_SCAN:
            return QrScanStrategy()
        return AdministrativeStrategy()
