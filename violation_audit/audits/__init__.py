"""
Audit definitions.

Contains:
- uses-passive-event-listeners - non-passive touch/wheel listeners
- geolocation-on-start - geolocation permission requested on load
- notification-on-start - notification permission requested on load
"""
