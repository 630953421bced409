"""
Path utilities for the page flattener.

Provides output filename generation and directory management.
"""

import os
import re
from urllib.parse import urlparse, unquote


def url_to_filename(url: str, default_name: str = "index") -> str:
    """
    Convert a page URL to a safe, flat filename.
    
    Args:
        url: URL to convert
        default_name: Name used when the URL has no path
        
    Returns:
        Safe filename ending in .html
    """
    parsed = urlparse(url if '://' in url else f"http://{url}")
    host = parsed.netloc.lower()
    if host.startswith('www.'):
        host = host[4:]
    
    path = unquote(parsed.path).strip('/')
    name = f"{host}_{path}" if path else f"{host}_{default_name}" if host else default_name
    
    # Replace path separators and invalid filename characters
    name = re.sub(r'[<>:"/\\|?*]', '_', name)
    
    if not name.endswith(('.html', '.htm')):
        name = f"{name}.html"
    
    return name


def ensure_dir(path: str) -> None:
    """
    Ensure a directory exists, creating it if necessary.
    
    Args:
        path: Directory path to ensure exists
    """
    os.makedirs(path, exist_ok=True)


def ensure_parent_dir(file_path: str) -> None:
    """
    Ensure the parent directory of a file exists.
    
    Args:
        file_path: File path whose parent directory should exist
    """
    parent = os.path.dirname(file_path)
    if parent:
        ensure_dir(parent)


def resolve_output_path(output: str, url: str) -> str:
    """
    Work out where the flattened page should be written.
    
    A directory (existing, or given with a trailing separator) receives a
    filename derived from the URL; anything else is used as the file path.
    """
    if output.endswith(('/', os.sep)) or os.path.isdir(output):
        return os.path.join(output, url_to_filename(url))
    return output
