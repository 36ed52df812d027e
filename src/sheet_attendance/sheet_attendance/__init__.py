"""Sheet Attendance package.

Check-in/check-out recorder backed by a spreadsheet (Google Sheets or an
Excel workbook reached through Microsoft Graph). Organized by feature
modules (attendance, employees, schedules, ...) with a thin Flask
controller layer over service and sheet-repository layers.
"""
