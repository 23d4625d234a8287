"""Users domain - users, static roles and role assignment"""
