"""
Admin Accounts App

Admin panel login and the bearer-token guard for admin routes.
"""
