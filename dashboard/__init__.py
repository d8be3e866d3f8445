"""
                Restaurant Dashboard

Backend for a restaurant-management dashboard: order entry with
menu filtering, staff shift editing, account flows and
transactional email, with a hybrid Mock/Real provider architecture.
"""

__version__ = "1.0.0"
