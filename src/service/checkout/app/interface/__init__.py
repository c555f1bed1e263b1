"""Application layer interfaces (Ports)"""

from src.service.checkout.app.interface.i_beacon_sender import IBeaconSender
from src.service.checkout.app.interface.i_navigator import INavigator
from src.service.checkout.app.interface.i_reservation_api import IReservationApi

__all__ = ['IBeaconSender', 'INavigator', 'IReservationApi']
