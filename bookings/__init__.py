"""Appointment booking service backed by an external calendar."""
