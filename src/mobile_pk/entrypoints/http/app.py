from fastapi import FastAPI

from mobile_pk.entrypoints.http.exception_handlers import register_exception_handlers
from mobile_pk.entrypoints.http.routes.brands import router as brands_router
from mobile_pk.entrypoints.http.routes.health import router as health_router
from mobile_pk.entrypoints.http.routes.mobiles import router as mobiles_router
from mobile_pk.entrypoints.http.routes.price_trends import router as price_trends_router


def build_app() -> FastAPI:
    app = FastAPI(
        title="MobilePK Price API",
        description="""
        Mobile phone price comparison API for the Pakistani market.

        ## Features
        - Search mobile listings with lowest price across retailers
        - Compare every retailer/city offer for a mobile
        - Average price by brand and monthly brand trends
        - Recent price changes and market summary

        ## Money
        Prices are whole PKR integers. Averages and percentages are decimal strings.

        ## Data quality
        Observations with invalid prices are left out of every aggregate and
        reported in the `warnings` array of the response.

        ## Error Handling
        All errors return structured JSON responses with error codes.
        """,
        version="0.1.0",
        docs_url="/docs",  # Swagger UI
        redoc_url="/redoc",  # ReDoc alternative
        openapi_url="/openapi.json",  # OpenAPI schema
        contact={
            "name": "MobilePK Team",
            "email": "dev@mobilepk.pk",
        },
        license_info={
            "name": "Proprietary",
        },
    )

    # Register global exception handlers
    register_exception_handlers(app)

    # Register routers
    app.include_router(health_router)
    app.include_router(mobiles_router, prefix="/v1")
    app.include_router(brands_router, prefix="/v1")
    app.include_router(price_trends_router, prefix="/v1")

    return app


app = build_app()
