from hivemind.regulator.scanner import OfferScanner
from hivemind.regulator.regulator import Regulator, TickReport

__all__ = ["OfferScanner", "Regulator", "TickReport"]
