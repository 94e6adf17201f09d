from protean.exceptions import ObjectNotFoundError


def find_order(repo, order_id):
    """Load an order, or None when the id does not resolve."""
    try:
        return repo.get(order_id)
    except ObjectNotFoundError:
        return None
