"""Store Payroll package.

This package is organized by feature modules (attendance, hours, wages, shifts,
payroll, ...) with a thin Flask controller layer and service/repository layers.
The calculation engine (time utilities, status machine, hours calculator, wage
rule engine, shift generator) never talks to a database directly; repositories
are injected.
"""
