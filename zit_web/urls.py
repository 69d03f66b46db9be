from django.urls import path

from . import views

app_name = 'zit_web'

urlpatterns = [
    path("", views.repo_overview, name="repo_overview"),
    path("commits/", views.commit_list, name="commit_list"),
    path("commit/<str:commit_sha>/", views.commit_detail, name="commit_detail"),
    path("blob/<str:sha>/", views.blob_view, name="blob_view"),
]
