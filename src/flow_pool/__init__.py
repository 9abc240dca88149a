"""Flow account pool.

Assigns end-users to a small pool of shared flow accounts, each with a hard
limit on concurrent holders. Organized by feature modules (accounts, users,
assignments) with thin Flask controllers over service/repository layers.
"""
