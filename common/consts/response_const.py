"""
Error code definitions
"""

# =========================
# Base
# =========================

RET_OK = 0                  # success
RET_ERR = 1                 # generic error
RET_UNKNOWN = 2             # unknown error


# =========================
# Request & Parameters (100–199)
# =========================

RET_INVALID_PARAM = 100         # invalid parameter


# =========================
# Auth & Permission (200–299)
# =========================

RET_UNAUTHORIZED = 200          # unauthorized


# =========================
# Business Logic (300–399)
# =========================

RET_BUSINESS_ERROR = 300         # generic business error
RET_RESOURCE_NOT_FOUND = 301     # resource not found
RET_PARTIAL_NOT_FOUND = 306      # some of the requested resources not found


# =========================
# Data & Storage (500–599)
# =========================

RET_DB_TRANSACTION_FAILED = 504  # transaction failed


# =========================
# Ops & Environment (800–899)
# =========================

RET_CONFIG_ERROR = 800            # configuration error
