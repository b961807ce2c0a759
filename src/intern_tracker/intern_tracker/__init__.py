"""Intern Tracker package.

This package is organized by feature modules (users, attendance, reports, ...)
with a thin Flask controller layer over service/repository layers. Each
repository has a MySQL implementation and a JSON file implementation for
local development.
"""
