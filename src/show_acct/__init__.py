"""
show-acct - Process Accounting File Reader

Decodes the fixed-size binary records written by the Linux process
accounting subsystem (acct v2 and acct_v3) and renders them as tabular or
delimited text.
"""

__version__ = "0.1.0"
__author__ = "Systems Engineering Portfolio"
