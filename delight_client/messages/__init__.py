from delight_client.messages.builder import MessageBuilder, make_id_factory, wall_clock_ms

__all__ = ["MessageBuilder", "make_id_factory", "wall_clock_ms"]
