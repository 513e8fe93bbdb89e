from django.urls import path

from sword2 import views

urlpatterns = [
        path('edit-media/<int:pk>/',
            views.MediaResourceView.as_view(), name='sword2-edit-media'),
        path('edit/<int:pk>/',
            views.EntryView.as_view(), name='sword2-edit'),
]
