"""
Admin console core for the careers ATS.

REST client, domain services and the stateful pieces of the console pages
(company cache, resource lists, dashboard poller, funnel normalization).
"""
