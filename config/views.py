from django.db import connection
from django.http import JsonResponse


def health_check(request):
    """Liveness probe; also verifies the database answers."""
    with connection.cursor() as cursor:
        cursor.execute('SELECT 1')
    return JsonResponse({'status': 'ok'})


# Non-API errors use the same {error, detail} body as service errors

def error_404(request, exception):
    return JsonResponse({
        'error': 'not_found',
        'detail': 'Not found.',
    }, status=404)


def error_500(request):
    return JsonResponse({
        'error': 'internal_error',
        'detail': 'Internal server error.',
    }, status=500)
