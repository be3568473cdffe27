"""Shift payroll package.

Organized by feature modules (attendance, policy, payroll) around a pure
calculation core. Repositories are thin MySQL adapters behind Protocol ports
and services orchestrate the approval workflow.
"""
