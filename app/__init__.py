"""CareerSync notification scheduling and email dispatch service."""
