"""Worklog System package.

Feature modules (users, work_entries, rollover) sit behind a thin Flask
controller layer with service/repository layers underneath. The rollover
feature carries each user's unfinished tasks forward onto the current civil day.
"""
