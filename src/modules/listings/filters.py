import django_filters

from modules.listings.models import Listing


class ListingFilter(django_filters.FilterSet):
    """Collection filters.

    ``price`` supports ``price__lt``, ``price__gt``, ``price__lte``,
    ``price__gte`` and ``price__range=<min>,<max>``.
    """

    isPublished = django_filters.BooleanFilter(field_name="is_published")  # noqa: N815
    title = django_filters.CharFilter(field_name="title", lookup_expr="icontains")
    description = django_filters.CharFilter(
        field_name="description", lookup_expr="icontains"
    )
    owner = django_filters.NumberFilter(field_name="owner_id")
    owner__username = django_filters.CharFilter(
        field_name="owner__username", lookup_expr="icontains"
    )

    class Meta:
        model = Listing
        fields = {
            "price": ["lt", "gt", "lte", "gte", "range"],
        }
