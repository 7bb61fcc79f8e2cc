"""Class Attendance package.

Feature modules (personnel, timeslots, classes, attendance, reports, auth)
each carry a model, a repository interface, a MySQL repository, a service and
a thin Flask JSON controller.
"""
