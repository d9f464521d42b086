"""Usage quota management.

Every user can make a limited number of generation requests per calendar
month and per calendar day. Limits are system-wide, but admin can override
monthly or daily limit (or both) for any user.

Usage counters are stored together with the period (month or day) they belong
to. Counters are never reset by a scheduler: when a record is read and its
period is not the current one, the counter is treated as zero (lazy rollover).

Please note that checking the quota and increasing the counters are two
separate operations made over plain key-value store. Two concurrent requests
made by the same user can both pass the check, so the limit can be exceeded
by the number of concurrent requests. This is accepted.
"""
