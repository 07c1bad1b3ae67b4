"""Rating arithmetic shared by products and sellers."""


def running_mean(average, count, rating):
    """Fold one more rating into an average taken over `count` ratings.

    (4.0, 2) plus a rating of 5 gives 13 / 3.
    """
    return ((average or 0.0) * (count or 0) + rating) / ((count or 0) + 1)
