"""Attendance & Tasks package.

Feature modules (users, attendance, tasks) each carry a model, a repository
protocol with its MySQL implementation, a service holding the business rules
and a thin Flask controller exposing them as a JSON API.
"""
