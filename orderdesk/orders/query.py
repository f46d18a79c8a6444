"""
GROQ queries used by the order dashboard.
"""

# Every order with its cart references dereferenced to product name and image
ORDERS_QUERY = """*[_type == "order"]{
  _id,
  firstName,
  lastName,
  phone,
  email,
  address,
  city,
  zipCode,
  total,
  discount,
  orderDate,
  status,
  cartItems[]->{
    productName,
    image
  }
}"""
