"""
Locations app for partner location sharing.

This app provides:
- Location model (one per user, last known position)
- LocationService for updating and reading positions
- REST API for the user's own and their partner's location

Usage:
    from locations.services import LocationService

    LocationService.update_location(user, latitude=48.85, longitude=2.35)
    result = LocationService.get_partner_location(user, partner)
"""
