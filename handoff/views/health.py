from django.core.cache import cache
from django.db import DatabaseError, connections
from django.http import JsonResponse


def healthz(request):
    """Report database and cache reachability for load balancer probes."""
    try:
        with connections['default'].cursor() as c:
            c.execute('SELECT 1')
            row = c.fetchone()
    except DatabaseError as e:
        return JsonResponse({'ok': False, 'db': False, 'error': str(e)}, status=503)
    try:
        cache.set('healthz', 1, 5)
        cache_ok = cache.get('healthz') == 1
    except Exception:
        cache_ok = False
    return JsonResponse({'ok': True, 'db': bool(row and row[0] == 1), 'cache': cache_ok})
