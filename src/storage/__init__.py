"""Persistence of computed APRs"""
from src.storage.apr_file import output_path_for, serialize_aprs, write_apr_file

__all__ = ['output_path_for', 'serialize_aprs', 'write_apr_file']
