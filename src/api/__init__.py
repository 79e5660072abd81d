"""HTTP surface for mq-bridge."""
