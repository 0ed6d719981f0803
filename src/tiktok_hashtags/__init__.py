"""
TikTok hashtag scraper.
Discovers or looks up hashtags and enriches them with secondary data.
"""

__version__ = "0.1.0"
