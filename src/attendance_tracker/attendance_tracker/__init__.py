"""Employee attendance tracker package.

Organized by feature modules (employees, attendance, stats, metrics) with a
thin Flask controller layer over service/repository layers.
"""
