"""LYNX site attendance package.

This package is organized by feature modules (users, teams, projects,
attendance, notifications, reports) with a thin Flask controller layer and
service/repository layers underneath.
"""
