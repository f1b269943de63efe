"""
Core — Constants

Audit action codes and domain-wide limits shared across apps.

@file core/constants.py
"""

AUDIT_ACTION_CREATE = 'CREATE'
AUDIT_ACTION_UPDATE = 'UPDATE'
AUDIT_ACTION_DELETE = 'DELETE'
AUDIT_ACTION_STATUS_CHANGE = 'STATUS_CHANGE'
AUDIT_ACTION_LOGIN = 'LOGIN'
AUDIT_ACTION_LOGOUT = 'LOGOUT'

# Hallmark Unique ID: 6 alphanumeric characters, gold only.
HUID_PATTERN = r'^[A-Za-z0-9]{6}$'

# Weights are grams to the milligram; charges to the paisa.
WEIGHT_MAX_DIGITS = 12
WEIGHT_DECIMAL_PLACES = 3
AMOUNT_MAX_DIGITS = 14
AMOUNT_DECIMAL_PLACES = 2
