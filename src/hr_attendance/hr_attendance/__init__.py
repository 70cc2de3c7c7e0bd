"""HR attendance package.

Feature modules (employees, attendance, payroll, ...) sit behind a thin Flask
controller layer; business rules live in services that talk to repository
interfaces.
"""
