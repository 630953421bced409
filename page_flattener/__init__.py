"""
Page Flattener - turn a web page into one self-contained HTML document.

This package fetches a page, resolves every external script and stylesheet
it references, and inlines their contents so the result has no outbound
resource references.
"""

__version__ = "1.0.0"
__author__ = "Page Flattener Team"
