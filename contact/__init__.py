"""
Contact Management App

Handles the website's contact form:
- Public contact form submission with validation
- Email notification to the firm for every submission
- Admin panel listing, status updates, replies and deletion
- Reply history per contact
"""
