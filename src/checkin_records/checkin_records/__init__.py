"""Check-in records package.

Organized by feature modules (records, client) on top of shared core/common/database
layers, with a thin Flask controller and service/repository layers underneath.
"""
