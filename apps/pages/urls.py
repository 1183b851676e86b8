from django.urls import path

from .views import AboutView, ArticlesView, ConferencesView, ContactView, FounderView, HomeView

app_name = "pages"
urlpatterns = [
    path("", HomeView.as_view(), name="home"),
    path("about/", AboutView.as_view(), name="about"),
    path("founder/", FounderView.as_view(), name="founder"),
    path("contact/", ContactView.as_view(), name="contact"),
    path("conferences/", ConferencesView.as_view(), name="conferences"),
    path("articles/", ArticlesView.as_view(), name="articles"),
]
