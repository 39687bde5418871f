"""
Pages Suite Package
===================
One suite per list-view page.
"""

from .clients import ClientsViewTests
from .client_search import ClientSearchTests
from .sales import SalesViewTests
from .invoices import InvoicesViewTests
from .traffic import TrafficViewTests

__all__ = [
    'ClientsViewTests',
    'ClientSearchTests',
    'SalesViewTests',
    'InvoicesViewTests',
    'TrafficViewTests',
]
