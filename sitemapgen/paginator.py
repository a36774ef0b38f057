from itertools import groupby


def paginate(entries, max_per_shard):
    '''
    Split entries into shards of at most ``max_per_shard`` entries.

    Every shard except the last one is full, and concatenating the shards
    gives back the original sequence.

    :param list entries:
    :param int max_per_shard:
    :rtype: list[list]
    '''
    if max_per_shard < 1:
        raise ValueError('max_per_shard must be a positive integer')
    return [[entry for _, entry in group] for _, group in
        groupby(enumerate(entries), key=lambda item: item[0] // max_per_shard)]
