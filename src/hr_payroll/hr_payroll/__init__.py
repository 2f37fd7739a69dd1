"""HR Payroll package.

Organized by feature modules (employees, components, attendance, leave, payroll)
with a thin Flask controller layer over service/repository layers.
"""
