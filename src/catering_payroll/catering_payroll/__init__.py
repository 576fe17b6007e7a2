"""Catering payroll package.

Organized by feature modules (staff, events, worklogs, importing, payroll,
availability) with a thin Flask controller layer over service/repository layers.
"""
