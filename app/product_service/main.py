# product_service/main.py
from fastapi import FastAPI, HTTPException

app = FastAPI(title="Product Service (dev mock)")


PRODUCTS = {
    "ITEM_123": {"sku": "ITEM_123", "name": "Keyboard", "price": 10},
    "KEYBOARD": {"sku": "KEYBOARD", "name": "Keyboard", "price": 199.99},
    "MOUSE": {"sku": "MOUSE", "name": "Mouse", "price": 49.50},
    "MONITOR": {"sku": "MONITOR", "name": "Monitor", "price": 899.00},
}

@app.get("/products/{sku}")
def get_product(sku: str):
    product = PRODUCTS.get(sku)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product
