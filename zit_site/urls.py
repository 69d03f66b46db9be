from django.urls import path, include

urlpatterns = [
    path('api/zit/', include('zit_web.urls', namespace='zit_web')),
]
