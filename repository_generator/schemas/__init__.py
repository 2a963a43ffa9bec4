from repository_generator.schemas.pagination import Page
