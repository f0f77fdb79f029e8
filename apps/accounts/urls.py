from django.urls import path
from . import views

app_name = 'users'

urlpatterns = [
    path('register/', views.register, name='register'),
    path('login/', views.login, name='login'),
    path('me/', views.current_user, name='current-user'),
    path('password/', views.change_password, name='change-password'),
]
