"""
Utility modules

Import helpers directly from their module to keep the dependency hierarchy flat:

    from brandvoice_xliff.utils.file_utils import default_output_path
"""

__all__ = []
