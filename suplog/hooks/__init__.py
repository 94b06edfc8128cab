"""Logging hooks that process entries before they are written."""