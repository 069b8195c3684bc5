"""Employee Performance Tracker package.

Organized by feature modules (users, tasks, reviews, attendance, messages)
with repository/service layers, a dashboard aggregation layer and a thin
Flask controller layer.
"""
