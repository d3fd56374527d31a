"""StaffDesk package.

Multi-tenant employee management, organized by feature modules (catalog,
employees, attendance, leaves, payroll, ...) with a thin Flask controller
layer over service/repository layers. Every service call is scoped to the
caller's company.
"""
