"""
Todo page package: query cache, API client, view and the web application
serving the page.
"""
