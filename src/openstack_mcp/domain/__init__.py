"""Domain objects for OpenStack resource queries."""
