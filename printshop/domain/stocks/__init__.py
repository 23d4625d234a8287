"""Stock domain - paper stock allocated to order and work order items"""
