"""Attendance Eligibility package.

Decides whether a device location sample counts as evidence of attendance
for a session (geofence + time window) and classifies sessions as
upcoming/live/past. Organized by feature modules (geo, sessions,
eligibility) with a thin Flask controller layer on top.
"""
