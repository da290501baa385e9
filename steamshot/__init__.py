"""
steamshot: find Steam apps and scrape the screenshots their players upload.
"""
