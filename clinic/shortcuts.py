from rest_framework.exceptions import NotFound


def get_object_or_404(model, pk, label: str | None = None, queryset=None):
    """Fetch ``model`` by primary key or raise ``NotFound('<Label> not found')``."""
    label = label or model._meta.verbose_name.capitalize()
    qs = queryset if queryset is not None else model.objects.all()
    try:
        obj = qs.filter(pk=pk).first()
    except (TypeError, ValueError):
        obj = None
    if obj is None:
        raise NotFound(f'{label} not found')
    return obj
