def get_alter_compaction_query(table, strategy_class, window_size, window_unit, keyspace=None):
    """
    Returns the CQL statement switching a table to a time-window compaction strategy.

    Args:
        table: Table name
        strategy_class: Compaction class name (e.g. TimeWindowCompactionStrategy)
        window_size: Compaction window size
        window_unit: Compaction window unit (MINUTES, HOURS, DAYS)
        keyspace: Optional keyspace to qualify the table with

    Returns:
        str: CQL statement
    """
    target = f"{keyspace}.{table}" if keyspace else table

    # Option values are sent as strings, the server parses them
    return (
        f"ALTER TABLE {target} WITH compaction = {{'class': '{strategy_class}', "
        f"'unchecked_tombstone_compaction': 'true', "
        f"'compaction_window_size': '{window_size}', "
        f"'compaction_window_unit': '{window_unit}'}}"
    )
