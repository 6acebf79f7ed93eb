import django_filters

from modules.accounts.models import Account


class AccountFilter(django_filters.FilterSet):
    username = django_filters.CharFilter(field_name="username", lookup_expr="icontains")
    email = django_filters.CharFilter(field_name="email", lookup_expr="iexact")

    class Meta:
        model = Account
        fields = ["username", "email"]
